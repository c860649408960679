"""Pixel-map format adapters."""

from __future__ import annotations
