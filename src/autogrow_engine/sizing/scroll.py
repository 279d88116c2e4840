"""Scroll offset capture/restore around a sizing pass."""

from __future__ import annotations

from autogrow_engine.surface import Surface


class ScrollPreserver:
    def __init__(self, surface: Surface) -> None:
        self.surface = surface

    def capture(self) -> float:
        return max(0.0, float(self.surface.capture_scroll()))

    def restore(self, offset: float, was_clamped_at_max: bool) -> float:
        """Put ``offset`` back only if the surface still scrolls.

        Returns the offset actually restored, 0 when the capture was dropped.
        """

        if not was_clamped_at_max:
            return 0.0
        offset = max(0.0, offset)
        self.surface.restore_scroll(offset)
        return offset


__all__ = ["ScrollPreserver"]
