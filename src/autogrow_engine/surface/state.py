"""Mutable sizing state owned by a single binding."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(slots=True)
class SurfaceState:
    """Height, overflow and scheduling flags for one bound surface."""

    current_height: float
    is_overflowing: bool = False
    is_expanded: bool = False
    last_scroll_offset: float = 0.0
    pending_adjustment: bool = False
    is_empty: bool = True
    last_transition_animated: bool = False
    composing: bool = False
    pass_count: int = 0

    def snapshot(self) -> "SurfaceState":
        return replace(self)

    def settle(self, height: float, overflowing: bool, *, min_height: float) -> None:
        self.current_height = height
        self.is_overflowing = overflowing
        self.is_expanded = height > min_height
