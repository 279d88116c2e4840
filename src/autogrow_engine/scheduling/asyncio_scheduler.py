"""Scheduler backed by an asyncio event loop."""

from __future__ import annotations

import asyncio
from typing import List, Optional

from .scheduler import Callback, ScheduledCall


class AsyncioScheduler:
    """Maps timers onto ``call_later`` and frames onto a fixed frame clock.

    All frame callbacks requested before the next frame boundary run together
    in one loop callback, in request order.
    """

    def __init__(
        self,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        *,
        frame_interval_ms: float = 16,
    ) -> None:
        if frame_interval_ms < 0:
            raise ValueError("frame_interval_ms cannot be negative")
        self._loop = loop
        self._frame_interval = frame_interval_ms / 1000.0
        self._frames: List[ScheduledCall] = []
        self._frame_handle: Optional[asyncio.TimerHandle] = None

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def schedule_after(self, delay_ms: float, callback: Callback) -> ScheduledCall:
        if delay_ms < 0:
            raise ValueError("delay_ms cannot be negative")
        call = ScheduledCall(callback, kind="timer")
        handle = self.loop.call_later(delay_ms / 1000.0, call.fire)
        call.on_cancel = handle.cancel
        return call

    def schedule_next_frame(self, callback: Callback) -> ScheduledCall:
        call = ScheduledCall(callback, kind="frame")
        self._frames.append(call)
        if self._frame_handle is None:
            self._frame_handle = self.loop.call_later(
                self._frame_interval, self._run_frame
            )
        return call

    def _run_frame(self) -> None:
        self._frame_handle = None
        frames, self._frames = self._frames, []
        for call in frames:
            call.fire()

    def close(self) -> None:
        if self._frame_handle is not None:
            self._frame_handle.cancel()
            self._frame_handle = None
        for call in self._frames:
            call.cancel()
        self._frames.clear()


__all__ = ["AsyncioScheduler"]
