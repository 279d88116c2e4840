"""Per-surface pass scheduling and the sizing pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional

from autogrow_engine.runtime import telemetry
from autogrow_engine.scheduling import ScheduledCall, Scheduler
from autogrow_engine.sizing import (
    ClampResult,
    ScrollPreserver,
    apply_fast_path,
    apply_height,
    clamp,
    is_blank,
    measure_natural_extent,
    should_animate,
)
from autogrow_engine.surface import Surface, SurfaceConfig, SurfaceState

from .events import HEIGHT_CHANGED, ContentCause, HeightChanged, SurfaceBus


class PassPhase(str, Enum):
    IDLE = "idle"
    SCHEDULED = "scheduled"
    RUNNING = "running"


class Strategy(str, Enum):
    DEBOUNCE = "debounce"
    DELAY = "delay"
    FRAME = "frame"
    SYNC = "sync"


@dataclass(frozen=True, slots=True)
class SchedulingRule:
    strategy: Strategy
    delay_ms: float = 0


def default_rules(config: SurfaceConfig) -> Mapping[ContentCause, SchedulingRule]:
    """Scheduling rule per cause for ``config``."""

    paste = SchedulingRule(Strategy.DELAY, config.paste_delay_ms)
    return MappingProxyType(
        {
            ContentCause.TYPED: SchedulingRule(Strategy.DEBOUNCE, config.debounce_ms),
            ContentCause.PASTE: paste,
            ContentCause.CUT: paste,
            ContentCause.DELETE: SchedulingRule(Strategy.FRAME),
            ContentCause.NEWLINE: SchedulingRule(
                Strategy.DELAY, config.newline_delay_ms
            ),
            ContentCause.EXTERNAL: SchedulingRule(Strategy.SYNC),
        }
    )


class PassCoordinator:
    """Owns one binding's state machine: IDLE -> SCHEDULED -> RUNNING -> IDLE.

    Requests made while a frame is already queued coalesce into it. Requests
    made while a pass runs (from a ``height.changed`` listener, say) queue a
    fresh frame. Blank content short-circuits everything and cancels whatever
    was pending.
    """

    def __init__(
        self,
        surface: Surface,
        config: SurfaceConfig,
        scheduler: Scheduler,
        *,
        name: str = "surface",
        bus: Optional[SurfaceBus] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        self.surface = surface
        self.config = config
        self.scheduler = scheduler
        self.name = name
        self.bus = bus or SurfaceBus()
        self.rules = default_rules(config)
        self.state = SurfaceState(current_height=config.min_height)
        self.logger_name = logger_name or "autogrow_engine.coordinator"
        self._scroll = ScrollPreserver(surface)
        self._debounce: Optional[ScheduledCall] = None
        self._delays: List[ScheduledCall] = []
        self._frame: Optional[ScheduledCall] = None
        self._running = False
        self._bound = True
        self._last_cause: Optional[ContentCause] = None

    # -- lifecycle -------------------------------------------------------
    @property
    def bound(self) -> bool:
        return self._bound

    @property
    def phase(self) -> PassPhase:
        if self._running:
            return PassPhase.RUNNING
        if self._has_pending():
            return PassPhase.SCHEDULED
        return PassPhase.IDLE

    def start(self) -> None:
        """Run the baseline pass; always publishes a ``height.changed``."""

        self.run_pass(baseline=True)

    def close(self) -> None:
        if not self._bound:
            return
        self._cancel_pending()
        self._bound = False
        self.bus.clear()
        self._sync_pending()

    # -- ingress ---------------------------------------------------------
    def notify(self, cause: ContentCause) -> None:
        if not self._bound:
            return
        self._last_cause = cause
        if cause is ContentCause.EXTERNAL:
            self.state.composing = False
        if self.state.composing:
            telemetry.record_event(
                "signal.held",
                level="debug",
                data={"surface": self.name, "cause": cause.value},
                logger_name=self.logger_name,
            )
            return

        if is_blank(self.surface.get_content()):
            self.fast_path(reason=cause.value)
            return
        self.state.is_empty = False

        rule = self.rules[cause]
        if rule.strategy is Strategy.SYNC:
            # The synchronous pass supersedes anything already queued.
            self._cancel_pending()
            self.run_pass()
        elif rule.strategy is Strategy.FRAME:
            self.request_frame()
        elif rule.strategy is Strategy.DEBOUNCE:
            if self._debounce is not None:
                self._debounce.cancel()
            self._debounce = self.scheduler.schedule_after(
                rule.delay_ms, self._on_debounce
            )
        else:
            self._delays = [call for call in self._delays if call.active]
            self._delays.append(
                self.scheduler.schedule_after(rule.delay_ms, self._on_delay)
            )
        self._sync_pending()

    def composition_started(self) -> None:
        if not self._bound or self.state.composing:
            return
        # Anything queued would measure a half-composed character.
        self._cancel_pending()
        self.state.composing = True
        self._sync_pending()

    def composition_ended(self) -> None:
        if not self._bound or not self.state.composing:
            return
        self.state.composing = False
        self.notify(ContentCause.TYPED)

    def reset(self) -> None:
        if not self._bound:
            return
        self.state.composing = False
        self.fast_path(reason="reset")

    def request_frame(self) -> None:
        if not self._bound:
            return
        if self._frame is not None and self._frame.active:
            return
        self._frame = self.scheduler.schedule_next_frame(self._on_frame)
        self._sync_pending()

    # -- pipeline --------------------------------------------------------
    def fast_path(self, *, reason: str) -> None:
        self._cancel_pending()
        self._apply_fast_path(force_event=False)
        telemetry.record_event(
            "surface.fast_path",
            level="debug",
            data={"surface": self.name, "reason": reason},
            logger_name=self.logger_name,
        )
        self._sync_pending()

    def run_pass(self, *, baseline: bool = False) -> None:
        if not self._bound:
            return
        if self._running:
            self.request_frame()
            return

        self._running = True
        try:
            with telemetry.span(
                "surface::pass",
                logger_name=self.logger_name,
                component="coordinator",
                metadata={
                    "surface": self.name,
                    "cause": self._last_cause.value if self._last_cause else "bind",
                },
            ) as handle:
                if is_blank(self.surface.get_content()):
                    handle.add_metadata("outcome", "fast_path")
                    if baseline or not self._at_rest():
                        self._apply_fast_path(force_event=baseline)
                    return
                self.state.is_empty = False
                handle.add_metadata("outcome", "measured")
                self._measure_and_apply(baseline=baseline)
        finally:
            self._running = False
            self._sync_pending()

    def _measure_and_apply(self, *, baseline: bool) -> None:
        config = self.config
        state = self.state
        old_height = state.current_height
        old_overflow = state.is_overflowing

        offset = self._scroll.capture()
        extent = measure_natural_extent(self.surface)
        result = clamp(extent, config.min_height, config.max_height)
        animated = not baseline and should_animate(
            old_height, result.height, config.transition_delta_threshold
        )
        apply_height(self.surface, result.height, animated=animated)
        self.surface.set_overflow_enabled(result.overflowing)
        self.surface.set_expanded(result.height > config.min_height)
        restored = self._scroll.restore(
            offset, was_clamped_at_max=result.height == config.max_height
        )

        state.settle(result.height, result.overflowing, min_height=config.min_height)
        state.last_scroll_offset = restored
        state.last_transition_animated = animated
        state.pass_count += 1
        self._publish(
            None if baseline else old_height,
            result,
            changed=baseline
            or result.height != old_height
            or result.overflowing != old_overflow,
        )

    def _apply_fast_path(self, *, force_event: bool) -> None:
        state = self.state
        old_height = state.current_height
        old_overflow = state.is_overflowing
        result = apply_fast_path(self.surface, self.config)
        state.settle(result.height, result.overflowing, min_height=self.config.min_height)
        state.is_empty = True
        state.last_scroll_offset = 0.0
        state.last_transition_animated = False
        self._publish(
            None if force_event else old_height,
            result,
            changed=force_event
            or result.height != old_height
            or result.overflowing != old_overflow,
        )

    def _publish(self, old: Optional[float], result: ClampResult, *, changed: bool) -> None:
        if not changed:
            return
        event = HeightChanged(old=old, new=result.height, overflowing=result.overflowing)
        telemetry.record_event(
            "surface.height_changed",
            level="debug",
            data={
                "surface": self.name,
                "old": old,
                "new": result.height,
                "overflowing": result.overflowing,
            },
            logger_name=self.logger_name,
        )
        self.bus.emit(HEIGHT_CHANGED, event)

    def _at_rest(self) -> bool:
        state = self.state
        return (
            state.is_empty
            and state.current_height == self.config.min_height
            and not state.is_overflowing
        )

    # -- timers ----------------------------------------------------------
    def _on_debounce(self) -> None:
        self._debounce = None
        self.request_frame()

    def _on_delay(self) -> None:
        self._delays = [call for call in self._delays if call.active]
        self.request_frame()

    def _on_frame(self) -> None:
        self._frame = None
        self.run_pass()

    def _has_pending(self) -> bool:
        if self._frame is not None and self._frame.active:
            return True
        if self._debounce is not None and self._debounce.active:
            return True
        return any(call.active for call in self._delays)

    def _cancel_pending(self) -> None:
        for call in (self._debounce, self._frame, *self._delays):
            if call is not None:
                call.cancel()
        self._debounce = None
        self._frame = None
        self._delays = []

    def _sync_pending(self) -> None:
        self.state.pending_adjustment = self._has_pending()


__all__ = [
    "PassCoordinator",
    "PassPhase",
    "SchedulingRule",
    "Strategy",
    "default_rules",
]
