"""Signals flowing into the engine and events flowing out of it."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

HEIGHT_CHANGED = "height.changed"


class ContentCause(str, Enum):
    """What mutated the content; selects the scheduling rule."""

    TYPED = "typed"
    PASTE = "paste"
    CUT = "cut"
    DELETE = "delete"
    NEWLINE = "newline"
    EXTERNAL = "external"

    @classmethod
    def parse(cls, value: "ContentCause | str") -> "ContentCause":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            choices = ", ".join(cause.value for cause in cls)
            raise ValueError(
                f"Unknown content cause '{value}' (expected one of: {choices})"
            ) from exc


@dataclass(frozen=True, slots=True)
class HeightChanged:
    """Emitted once per completed pass that changed height or overflow.

    ``old`` is ``None`` for the baseline pass run at bind time.
    """

    old: Optional[float]
    new: float
    overflowing: bool


class SurfaceBus:
    """Per-binding event bus; subscribers are dropped on unbind."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Callable[[object], None]) -> None:
        callbacks = self._subscribers.get(event)
        if callbacks and callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)

    def clear(self) -> None:
        self._subscribers.clear()


__all__ = ["ContentCause", "HEIGHT_CHANGED", "HeightChanged", "SurfaceBus"]
