"""Validation helpers run when a surface is bound."""

from __future__ import annotations

from .config import SurfaceConfig
from .sync import ConfigurationError

_TIMINGS = (
    "debounce_ms",
    "transition_duration_ms",
    "transition_delta_threshold",
    "paste_delay_ms",
    "newline_delay_ms",
)


def validate_config(config: SurfaceConfig) -> SurfaceConfig:
    if config.min_height <= 0:
        raise ConfigurationError("min_height must be positive", field="min_height")
    if config.max_height <= config.min_height:
        raise ConfigurationError(
            "max_height must be greater than min_height", field="max_height"
        )
    for name in _TIMINGS:
        if getattr(config, name) < 0:
            raise ConfigurationError(f"{name} cannot be negative", field=name)
    return config
