"""Textual adapter that sizes a ``TextArea`` through the engine."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from autogrow_engine.engine import (
    AutoGrowEngine,
    ContentCause,
    HeightChanged,
    SurfaceHandle,
)
from autogrow_engine.scheduling import Callback, ScheduledCall
from autogrow_engine.surface import SurfaceConfig

EXPANDED_CLASS = "-expanded"

KEY_CAUSES: Dict[str, ContentCause] = {
    "backspace": ContentCause.DELETE,
    "delete": ContentCause.DELETE,
    "ctrl+h": ContentCause.DELETE,
    "ctrl+w": ContentCause.DELETE,
    "ctrl+u": ContentCause.DELETE,
    "ctrl+k": ContentCause.DELETE,
    "shift+enter": ContentCause.NEWLINE,
    "ctrl+j": ContentCause.NEWLINE,
    "ctrl+x": ContentCause.CUT,
    "ctrl+v": ContentCause.PASTE,
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


class TextAreaSurface:
    """``Surface`` over a Textual ``TextArea``; heights are in cells."""

    def __init__(self, widget: Any, *, transition_duration_ms: float = 0) -> None:
        self.widget = widget
        self.transition_duration_ms = transition_duration_ms
        self._transitions = True

    def get_content(self) -> str:
        return str(self.widget.text)

    def get_natural_extent(self) -> float:
        gutter = self.widget.styles.gutter
        return float(self.widget.virtual_size.height + gutter.height)

    def apply_height(self, height: float) -> None:
        cells = math.ceil(height)
        if cells <= 0:
            # virtual_size ignores the widget height, so the measuring collapse is
            # skipped and animations start from the last real height.
            return
        styles = self.widget.styles
        if self._transitions and self.transition_duration_ms > 0:
            styles.animate(
                "height", cells, duration=self.transition_duration_ms / 1000.0
            )
        else:
            styles.height = cells

    def set_overflow_enabled(self, enabled: bool) -> None:
        self.widget.styles.overflow_y = "auto" if enabled else "hidden"

    def set_expanded(self, expanded: bool) -> None:
        self.widget.set_class(expanded, EXPANDED_CLASS)

    def set_transition_enabled(self, enabled: bool) -> None:
        self._transitions = enabled

    def capture_scroll(self) -> float:
        return float(self.widget.scroll_y)

    def restore_scroll(self, offset: float) -> None:
        self.widget.scroll_to(y=offset, animate=False)


class TextualScheduler:
    """Timers via ``set_timer``, frames via ``call_after_refresh``."""

    def __init__(self, node: Any) -> None:
        self.node = node

    def schedule_after(self, delay_ms: float, callback: Callback) -> ScheduledCall:
        call = ScheduledCall(callback, kind="timer")
        timer = self.node.set_timer(delay_ms / 1000.0, call.fire)
        call.on_cancel = timer.stop
        return call

    def schedule_next_frame(self, callback: Callback) -> ScheduledCall:
        call = ScheduledCall(callback, kind="frame")
        self.node.call_after_refresh(call.fire)
        return call


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the controller uses to reach the host app."""

    height_changed: Callable[[HeightChanged], None] = _noop
    update_status: Callable[[str], None] = _noop
    # Optional realtime log sink for debugging
    log: Callable[[str], None] = _noop


class TextualGrowController:
    """Translates ``TextArea`` activity into engine signals."""

    def __init__(
        self,
        engine: AutoGrowEngine,
        widget: Any,
        config: SurfaceConfig,
        hooks: Optional[TextualUIHooks] = None,
        *,
        name: str = "composer",
    ) -> None:
        self.engine = engine
        self.widget = widget
        self.hooks = hooks or TextualUIHooks()
        self.name = name
        self.surface = TextAreaSurface(
            widget, transition_duration_ms=config.transition_duration_ms
        )
        # Assigned once bind returns; the baseline event arrives before that.
        self.handle: Optional[SurfaceHandle] = None
        self.handle = engine.bind(
            self.surface, config, name=name, on_height_changed=self._on_height_changed
        )

    def handle_key(self, key: str) -> Optional[ContentCause]:
        """Signal the cause bound to ``key``; plain typing arrives via ``Changed``."""

        cause = KEY_CAUSES.get(key.lower())
        if cause is not None:
            self.handle_signal(cause, key=key)
        return cause

    def handle_changed(self) -> None:
        self.handle_signal(ContentCause.TYPED)

    def handle_paste(self, text: str) -> None:
        self.handle_signal(ContentCause.PASTE, chars=len(text))

    def set_text(self, text: str) -> None:
        """Programmatic assignment; sized synchronously."""

        self.widget.load_text(text)
        self.handle_signal(ContentCause.EXTERNAL)

    def clear(self) -> None:
        self.widget.clear()
        self.engine.reset(self.handle)
        self._log_state("reset ->")

    def close(self) -> None:
        self.engine.unbind(self.handle)

    def handle_signal(self, cause: ContentCause, **fields: object) -> None:
        self._log_state("signal ->", cause=cause.value, **fields)
        self.engine.notify_content_changed(self.handle, cause)

    def _on_height_changed(self, event: HeightChanged) -> None:
        suffix = " (scrolling)" if event.overflowing else ""
        self.hooks.update_status(f"height {event.new:g}{suffix}")
        self.hooks.height_changed(event)
        self._log_state("height <-", old=event.old, new=event.new)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        if self.handle is None:
            return {"surface": self.name, "binding": True}
        state = self.engine.state(self.handle)
        if state is None:
            return {"surface": self.name, "bound": False}
        return {
            "surface": self.name,
            "height": state.current_height,
            "overflowing": state.is_overflowing,
            "pending": state.pending_adjustment,
        }


__all__ = [
    "EXPANDED_CLASS",
    "KEY_CAUSES",
    "TextAreaSurface",
    "TextualGrowController",
    "TextualScheduler",
    "TextualUIHooks",
]
