"""Inspection helpers: text rendering, hashing and grid comparison."""

from __future__ import annotations

import hashlib
import logging
from typing import Any

import numpy as np

from rasterops.core.grid import PixelGrid

logger = logging.getLogger(__name__)

MAX_REPORTED_CHANGES = 50


def render_grid(grid: PixelGrid) -> str:
    """Render a grid as text, one line of ``(r,g,b)`` tuples per row.

    Intended for small images; the header names the dimensions, e.g.
    ``Image 4x4 (3 channels):``.
    """
    lines = [f"Image {grid.width}x{grid.height} ({grid.channels} channels):"]
    arr = grid.as_array()
    for row in arr:
        lines.append(
            " ".join("(" + ",".join(str(int(v)) for v in px) + ")" for px in row)
        )
    return "\n".join(lines)


def grid_hash(grid: PixelGrid) -> str:
    """Stable digest of the dimensions, ``max_value`` and samples."""
    h = hashlib.sha256()
    h.update(f"{grid.width}x{grid.height}x{grid.channels}/{grid.max_value}".encode())
    h.update(grid.as_array().tobytes())
    return h.hexdigest()


def grid_diff(before: PixelGrid, after: PixelGrid) -> dict[str, Any]:
    """Compare two grids, returning structured observations.

    Sample-level changes are only listed when both grids have the same shape.
    """
    changed: list[dict[str, int]] = []
    n_changed = 0
    if before.shape == after.shape:
        a, b = before.as_array(), after.as_array()
        mask = a != b
        n_changed = int(mask.sum())
        for r, c, k in zip(*np.where(mask)):
            if len(changed) >= MAX_REPORTED_CHANGES:
                break
            changed.append({
                "row": int(r),
                "col": int(c),
                "channel": int(k),
                "from": int(a[r, c, k]),
                "to": int(b[r, c, k]),
            })

    shape_changed = before.shape != after.shape
    return {
        "before": {"shape": list(before.shape), "max_value": before.max_value},
        "after": {"shape": list(after.shape), "max_value": after.max_value},
        "shape_changed": shape_changed,
        "identical": (not shape_changed) and n_changed == 0
        and before.max_value == after.max_value,
        "n_changed_samples": n_changed,
        "changed_samples": changed,
    }
