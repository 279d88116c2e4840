"""Animated vs instant height application."""

from __future__ import annotations

from autogrow_engine.surface import Surface


def should_animate(old_height: float, new_height: float, delta_threshold: float) -> bool:
    return abs(new_height - old_height) > delta_threshold


def apply_height(surface: Surface, height: float, *, animated: bool) -> None:
    """Apply ``height``; instant changes run with transitions switched off."""

    if animated:
        surface.apply_height(height)
        return
    surface.set_transition_enabled(False)
    try:
        surface.apply_height(height)
    finally:
        surface.set_transition_enabled(True)


__all__ = ["apply_height", "should_animate"]
