"""Scheduler primitives and the poll-driven frame scheduler."""

from __future__ import annotations

import heapq
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Tuple

Callback = Callable[[], None]


class ScheduledCall:
    """Cancellable handle for a deferred callback."""

    __slots__ = ("_callback", "_cancelled", "_done", "on_cancel", "kind")

    def __init__(
        self,
        callback: Callback,
        *,
        kind: str = "frame",
        on_cancel: Optional[Callback] = None,
    ) -> None:
        self._callback = callback
        self._cancelled = False
        self._done = False
        self.on_cancel = on_cancel
        self.kind = kind

    @property
    def active(self) -> bool:
        return not (self._cancelled or self._done)

    def cancel(self) -> None:
        if not self.active:
            return
        self._cancelled = True
        if self.on_cancel is not None:
            self.on_cancel()

    def fire(self) -> bool:
        """Run the callback once; returns False if it was cancelled or spent."""

        if not self.active:
            return False
        self._done = True
        self._callback()
        return True


class Scheduler(Protocol):
    def schedule_next_frame(self, callback: Callback) -> ScheduledCall:
        """Run ``callback`` right before the host's next repaint."""
        ...

    def schedule_after(self, delay_ms: float, callback: Callback) -> ScheduledCall:
        """Run ``callback`` once ``delay_ms`` has elapsed."""
        ...


@dataclass(order=True)
class _Timer:
    deadline: float
    sequence: int
    call: ScheduledCall = field(compare=False)


class FrameScheduler:
    """Deadline queue drained by an explicit ``tick()``.

    Hosts call ``tick()`` from their render loop. Due timers fire first in
    deadline order, then the frame callbacks queued before the tick started.
    Frames requested while frames are running land in the next tick.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._timers: List[_Timer] = []
        self._frames: List[ScheduledCall] = []
        self._sequence = 0

    def schedule_next_frame(self, callback: Callback) -> ScheduledCall:
        call = ScheduledCall(callback, kind="frame")
        self._frames.append(call)
        return call

    def schedule_after(self, delay_ms: float, callback: Callback) -> ScheduledCall:
        if delay_ms < 0:
            raise ValueError("delay_ms cannot be negative")
        self._prune()
        self._sequence += 1
        call = ScheduledCall(callback, kind="timer")
        deadline = self._clock() + delay_ms / 1000.0
        heapq.heappush(self._timers, _Timer(deadline, self._sequence, call))
        return call

    def tick(self) -> int:
        """Fire everything due now; returns how many callbacks ran."""

        fired = 0
        now = self._clock()
        self._prune()
        while self._timers and self._timers[0].deadline <= now:
            timer = heapq.heappop(self._timers)
            if timer.call.fire():
                fired += 1

        frames, self._frames = self._frames, []
        for call in frames:
            if call.fire():
                fired += 1
        return fired

    def pending(self) -> Tuple[int, int]:
        """Active ``(timers, frames)`` still waiting."""

        timers = sum(1 for timer in self._timers if timer.call.active)
        frames = sum(1 for call in self._frames if call.active)
        return timers, frames

    def next_deadline(self) -> Optional[float]:
        live = [timer.deadline for timer in self._timers if timer.call.active]
        return min(live) if live else None

    def queued(self) -> int:
        """Entries held in the queues, including cancelled ones not yet dropped."""

        return len(self._timers) + len(self._frames)

    def _prune(self) -> None:
        # Superseded debounce timers would otherwise sit in the heap until due.
        if any(not timer.call.active for timer in self._timers):
            self._timers = [timer for timer in self._timers if timer.call.active]
            heapq.heapify(self._timers)
        self._frames = [call for call in self._frames if call.active]


__all__ = ["Callback", "FrameScheduler", "ScheduledCall", "Scheduler"]
