"""Boundary types between the engine and host widgets."""

from __future__ import annotations

from typing import Protocol


class Surface(Protocol):
    """Capability interface every sizable text surface implements.

    Plain fields and editable regions look the same from the engine's side.
    Heights are in the host's layout unit (px for browsers, cells for
    terminals).
    """

    def get_content(self) -> str:
        """Return the current text."""
        ...

    def get_natural_extent(self) -> float:
        """Return the extent the content needs given the current layout."""
        ...

    def apply_height(self, height: float) -> None:
        """Set the box height in layout units.

        ``0`` is the measuring collapse: the host may lay content out from scratch
        or, where its extent never depends on the applied height, ignore it.
        Any positive value is a real height and animates while transitions are
        enabled.
        """
        ...

    def set_overflow_enabled(self, enabled: bool) -> None:
        """Toggle internal scrolling."""
        ...

    def set_expanded(self, expanded: bool) -> None:
        """Update the accessibility flag for "taller than minimum"."""
        ...

    def set_transition_enabled(self, enabled: bool) -> None:
        """Allow or suppress animation of the next height changes."""
        ...

    def capture_scroll(self) -> float:
        """Return the internal scroll offset in layout units."""
        ...

    def restore_scroll(self, offset: float) -> None:
        """Scroll back to ``offset``; hosts clamp it to the scrollable range."""
        ...


class ConfigurationError(ValueError):
    """Raised when a ``SurfaceConfig`` cannot be used for a binding."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


__all__ = ["Surface", "ConfigurationError"]
