"""Transform engine.

Pure per-pixel and neighbourhood transforms over :class:`PixelGrid`, a
registry for composing them into programs, and inspection helpers.
"""

from __future__ import annotations
