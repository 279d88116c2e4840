"""Snap-to-rest handling for blank content."""

from __future__ import annotations

from autogrow_engine.surface import Surface, SurfaceConfig

from .clamp import ClampResult
from .transition import apply_height


def is_blank(text: str) -> bool:
    return not text.strip()


def apply_fast_path(surface: Surface, config: SurfaceConfig) -> ClampResult:
    """Reset ``surface`` to ``min_height`` without measuring or animating."""

    apply_height(surface, config.min_height, animated=False)
    surface.set_overflow_enabled(False)
    surface.set_expanded(False)
    return ClampResult(height=config.min_height, overflowing=False)


__all__ = ["apply_fast_path", "is_blank"]
