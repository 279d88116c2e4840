"""Surface configuration, state, and the capability protocol."""

from .config import SurfaceConfig
from .host import EditableRegionSurface, SurfaceOp, TextFieldSurface
from .state import SurfaceState
from .sync import ConfigurationError, Surface
from .validation import validate_config

__all__ = [
    "ConfigurationError",
    "EditableRegionSurface",
    "Surface",
    "SurfaceConfig",
    "SurfaceOp",
    "SurfaceState",
    "TextFieldSurface",
    "validate_config",
]
