"""Pure mapping from natural extent to a bounded height."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ClampResult:
    height: float
    overflowing: bool


def clamp(natural_extent: float, min_height: float, max_height: float) -> ClampResult:
    """Bound ``natural_extent`` to ``[min_height, max_height]``.

    Overflow is strict: content exactly ``max_height`` tall still fits.
    """

    height = max(min_height, min(natural_extent, max_height))
    return ClampResult(height=height, overflowing=natural_extent > max_height)


__all__ = ["ClampResult", "clamp"]
