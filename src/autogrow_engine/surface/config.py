"""Per-binding sizing configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional

from .sync import ConfigurationError

ENV_PREFIX = "AUTOGROW_ENGINE_"

_ENV_KEYS = {
    "min_height": "MIN_HEIGHT",
    "max_height": "MAX_HEIGHT",
    "debounce_ms": "DEBOUNCE_MS",
    "transition_duration_ms": "TRANSITION_MS",
    "transition_delta_threshold": "TRANSITION_THRESHOLD",
    "paste_delay_ms": "PASTE_DELAY_MS",
    "newline_delay_ms": "NEWLINE_DELAY_MS",
}

_CAMEL_KEYS = {
    "minHeight": "min_height",
    "maxHeight": "max_height",
    "debounceMs": "debounce_ms",
    "transitionDurationMs": "transition_duration_ms",
    "transitionDeltaThreshold": "transition_delta_threshold",
    "pasteDelayMs": "paste_delay_ms",
    "newlineDelayMs": "newline_delay_ms",
}


@dataclass(frozen=True, slots=True)
class SurfaceConfig:
    """Immutable bounds and timing for one bound surface.

    Values are checked by ``validate_config`` when the engine binds, not here,
    so configs read from env or user settings fail where they are used.
    """

    min_height: float = 44
    max_height: float = 320
    debounce_ms: float = 10
    transition_duration_ms: float = 120
    transition_delta_threshold: float = 2
    paste_delay_ms: float = 10
    newline_delay_ms: float = 10

    def with_overrides(self, **changes: Any) -> "SurfaceConfig":
        return replace(self, **changes)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SurfaceConfig":
        """Build a config from snake_case or camelCase keys."""

        known = {f.name for f in fields(cls)}
        values: dict[str, float] = {}
        for raw_key, raw_value in data.items():
            key = _CAMEL_KEYS.get(raw_key, raw_key)
            if key not in known:
                raise ConfigurationError(f"Unknown option '{raw_key}'", field=raw_key)
            values[key] = _coerce(key, raw_value)
        return cls(**values)

    @classmethod
    def from_env(
        cls,
        prefix: str = ENV_PREFIX,
        *,
        environ: Optional[Mapping[str, str]] = None,
        base: Optional["SurfaceConfig"] = None,
    ) -> "SurfaceConfig":
        """Read ``<prefix>MIN_HEIGHT`` and friends on top of ``base``.

        Unset or blank variables keep the value from ``base`` (class defaults
        when omitted).
        """

        env = os.environ if environ is None else environ
        values: dict[str, float] = {}
        for key, suffix in _ENV_KEYS.items():
            raw = env.get(f"{prefix}{suffix}")
            if raw is not None and raw.strip():
                values[key] = _coerce(key, raw)
        return replace(base or cls(), **values)


def _coerce(key: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigurationError(f"{key} must be a number", field=key)
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"{key} must be a number, got {value!r}", field=key
        ) from exc


__all__ = ["SurfaceConfig", "ENV_PREFIX"]
