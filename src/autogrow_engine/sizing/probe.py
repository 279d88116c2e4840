"""Natural extent measurement."""

from __future__ import annotations

from autogrow_engine.surface import Surface

# Below any valid min_height, forces the host to lay content out from scratch.
COLLAPSE_SENTINEL_PX = 0


def measure_natural_extent(surface: Surface) -> float:
    """Collapse the surface and read back the extent its content needs.

    Layout engines keep reporting the applied height after content shrinks,
    so the read only reflects the content once the box has been collapsed.
    The caller must apply a real height right after.
    """

    surface.set_transition_enabled(False)
    try:
        surface.apply_height(COLLAPSE_SENTINEL_PX)
        return float(surface.get_natural_extent())
    finally:
        surface.set_transition_enabled(True)


__all__ = ["COLLAPSE_SENTINEL_PX", "measure_natural_extent"]
