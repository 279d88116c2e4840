"""Deferral primitives used by the event coordinator."""

from .asyncio_scheduler import AsyncioScheduler
from .scheduler import Callback, FrameScheduler, ScheduledCall, Scheduler

__all__ = [
    "AsyncioScheduler",
    "Callback",
    "FrameScheduler",
    "ScheduledCall",
    "Scheduler",
]
