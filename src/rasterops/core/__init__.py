"""Image data model.

Provides :class:`PixelGrid`, the owned (height x width x channels) sample
buffer every transform consumes and produces.
"""

from __future__ import annotations
