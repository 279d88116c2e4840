"""Event coordination and the public engine API."""

from .coordinator import (
    PassCoordinator,
    PassPhase,
    SchedulingRule,
    Strategy,
    default_rules,
)
from .engine import AutoGrowEngine, HeightListener, SurfaceHandle
from .events import HEIGHT_CHANGED, ContentCause, HeightChanged, SurfaceBus

__all__ = [
    "AutoGrowEngine",
    "ContentCause",
    "HEIGHT_CHANGED",
    "HeightChanged",
    "HeightListener",
    "PassCoordinator",
    "PassPhase",
    "SchedulingRule",
    "Strategy",
    "SurfaceBus",
    "SurfaceHandle",
    "default_rules",
]
