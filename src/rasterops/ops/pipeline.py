"""Transform registry and composition.

Transforms are registered by name in ``TRANSFORMS`` so that pipelines can be
written as data: a program is a list of steps such as ``{"op": "blur"}`` or
``{"op": "brightness", "args": {"delta": 40}}`` executed in order by
``apply_program()``.  ``parse_step()`` turns the CLI's ``name[:value]`` syntax
into such a step.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable

from rasterops.core.grid import PixelGrid
from rasterops.errors import UnknownTransformError
from rasterops.ops.transforms import (
    adjust_brightness,
    adjust_contrast,
    blur,
    flip_horizontal,
    flip_vertical,
    grayscale,
    rotate_90,
)

logger = logging.getLogger(__name__)

# Type alias for a grid transformation function
Transform = Callable[..., PixelGrid]

# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

TRANSFORMS: dict[str, Transform] = {
    "grayscale": grayscale,
    "flip_horizontal": flip_horizontal,
    "flip_vertical": flip_vertical,
    "brightness": adjust_brightness,
    "contrast": adjust_contrast,
    "blur": blur,
    "rotate_90": rotate_90,
}

PARAMETERS: dict[str, tuple[str, type]] = {
    "brightness": ("delta", int),
    "contrast": ("factor", float),
}
"""Name and type of the single parameter taken by parameterised transforms."""


def get_transform(name: str) -> Transform:
    """Look up a registered transform, raising ``UnknownTransformError``."""
    try:
        return TRANSFORMS[name]
    except KeyError:
        raise UnknownTransformError(f"unknown transform: {name}") from None


def describe_transforms() -> list[dict[str, str]]:
    """Name, parameter and one-line summary of every registered transform."""
    rows: list[dict[str, str]] = []
    for name, fn in TRANSFORMS.items():
        param = PARAMETERS.get(name)
        doc = (fn.__doc__ or "").strip().splitlines()
        rows.append({
            "name": name,
            "parameter": f"{param[0]}: {param[1].__name__}" if param else "",
            "summary": doc[0] if doc else "",
        })
    return rows


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


def compose(*transforms: Transform) -> Transform:
    """Compose multiple transforms: f, g, h → h(g(f(grid)))."""
    def composed(grid: PixelGrid) -> PixelGrid:
        result = grid
        for fn in transforms:
            result = fn(result)
        return result
    return composed


def parse_step(text: str) -> dict[str, Any]:
    """Parse ``name`` or ``name:value`` into a program step.

    >>> parse_step("contrast:1.5")
    {'op': 'contrast', 'args': {'factor': 1.5}}
    """
    name, sep, raw = text.strip().partition(":")
    name = name.strip()
    get_transform(name)
    param = PARAMETERS.get(name)
    if not sep:
        if param is not None:
            raise ValueError(f"{name} needs a value, e.g. {name}:<{param[0]}>")
        return {"op": name}
    if param is None:
        raise ValueError(f"{name} takes no value, got {raw!r}")
    arg_name, arg_type = param
    try:
        value = arg_type(raw.strip())
    except ValueError:
        raise ValueError(
            f"invalid {arg_name} for {name}: {raw!r} is not {arg_type.__name__}"
        ) from None
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"invalid {arg_name} for {name}: {raw!r} is not finite")
    return {"op": name, "args": {arg_name: value}}


def apply_program(
    program: list[dict[str, Any]],
    grid: PixelGrid,
) -> PixelGrid:
    """Execute a serialised program (list of step dicts) on a grid.

    Each step: ``{"op": "rotate_90"}`` or ``{"op": "contrast", "args": {"factor": 1.2}}``.
    An unknown op aborts the whole program with ``UnknownTransformError``.
    The input grid is never modified.
    """
    result = grid
    for step in program:
        op_name = step.get("op", "")
        args = step.get("args", {})
        fn = get_transform(op_name)
        logger.debug("Applying %s %s to %r", op_name, args, result)
        result = fn(result, **args)
    if result is grid:
        result = grid.copy()
    return result
