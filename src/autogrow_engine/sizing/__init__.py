"""Measurement, clamping, scroll and transition building blocks."""

from .clamp import ClampResult, clamp
from .fast_path import apply_fast_path, is_blank
from .probe import COLLAPSE_SENTINEL_PX, measure_natural_extent
from .scroll import ScrollPreserver
from .transition import apply_height, should_animate

__all__ = [
    "COLLAPSE_SENTINEL_PX",
    "ClampResult",
    "ScrollPreserver",
    "apply_fast_path",
    "apply_height",
    "clamp",
    "is_blank",
    "measure_natural_extent",
    "should_animate",
]
