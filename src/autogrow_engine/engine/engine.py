"""Public entry point: bind surfaces, feed signals, tear down."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from autogrow_engine.runtime import telemetry
from autogrow_engine.scheduling import Scheduler
from autogrow_engine.surface import Surface, SurfaceConfig, SurfaceState, validate_config

from .coordinator import PassCoordinator, PassPhase
from .events import HEIGHT_CHANGED, ContentCause, HeightChanged, SurfaceBus

HeightListener = Callable[[HeightChanged], None]


@dataclass(frozen=True, slots=True)
class SurfaceHandle:
    """Opaque token returned by ``AutoGrowEngine.bind``."""

    id: int
    name: str


class AutoGrowEngine:
    """Keeps every bound surface's height in sync with its content.

    Each binding gets its own state, bus and coordinator; nothing is shared
    between bindings except the scheduler. Calls with a handle that was never
    bound, or has been unbound, do nothing.
    """

    def __init__(self, scheduler: Scheduler, *, logger_name: str | None = None) -> None:
        self.scheduler = scheduler
        self.logger_name = logger_name or "autogrow_engine.engine"
        self.logger = telemetry.get_logger(self.logger_name)
        self._bindings: Dict[int, PassCoordinator] = {}
        self._ids = itertools.count(1)

    def bind(
        self,
        surface: Surface,
        config: SurfaceConfig | None = None,
        *,
        name: str | None = None,
        on_height_changed: HeightListener | None = None,
    ) -> SurfaceHandle:
        config = validate_config(config or SurfaceConfig())
        handle_id = next(self._ids)
        handle = SurfaceHandle(id=handle_id, name=name or f"surface-{handle_id}")
        coordinator = PassCoordinator(
            surface,
            config,
            self.scheduler,
            name=handle.name,
            bus=SurfaceBus(),
            logger_name="autogrow_engine.coordinator",
        )
        self._bindings[handle_id] = coordinator
        if on_height_changed is not None:
            self.subscribe(handle, on_height_changed)
        telemetry.record_event(
            "surface.bind",
            data={
                "surface": handle.name,
                "min_height": config.min_height,
                "max_height": config.max_height,
            },
            logger_name=self.logger_name,
        )
        try:
            coordinator.start()
        except Exception:
            self._bindings.pop(handle_id, None)
            coordinator.close()
            raise
        return handle

    def notify_content_changed(
        self, handle: SurfaceHandle, cause: ContentCause | str
    ) -> None:
        parsed = ContentCause.parse(cause)
        coordinator = self._lookup(handle, "notify")
        if coordinator is not None:
            coordinator.notify(parsed)

    def composition_started(self, handle: SurfaceHandle) -> None:
        coordinator = self._lookup(handle, "composition_started")
        if coordinator is not None:
            coordinator.composition_started()

    def composition_ended(self, handle: SurfaceHandle) -> None:
        coordinator = self._lookup(handle, "composition_ended")
        if coordinator is not None:
            coordinator.composition_ended()

    def reset(self, handle: SurfaceHandle) -> None:
        coordinator = self._lookup(handle, "reset")
        if coordinator is not None:
            coordinator.reset()

    def unbind(self, handle: SurfaceHandle) -> None:
        coordinator = self._bindings.pop(handle.id, None)
        if coordinator is None:
            self._ignored(handle, "unbind")
            return
        coordinator.close()
        telemetry.record_event(
            "surface.unbind",
            data={"surface": handle.name, "passes": coordinator.state.pass_count},
            logger_name=self.logger_name,
        )

    def subscribe(self, handle: SurfaceHandle, listener: HeightListener) -> None:
        coordinator = self._lookup(handle, "subscribe")
        if coordinator is not None:
            coordinator.bus.subscribe(HEIGHT_CHANGED, listener)  # type: ignore[arg-type]

    def unsubscribe(self, handle: SurfaceHandle, listener: HeightListener) -> None:
        coordinator = self._bindings.get(handle.id)
        if coordinator is not None:
            coordinator.bus.unsubscribe(HEIGHT_CHANGED, listener)  # type: ignore[arg-type]

    def state(self, handle: SurfaceHandle) -> Optional[SurfaceState]:
        """Copy of the binding's state, or ``None`` once unbound."""

        coordinator = self._bindings.get(handle.id)
        return coordinator.state.snapshot() if coordinator is not None else None

    def phase(self, handle: SurfaceHandle) -> Optional[PassPhase]:
        coordinator = self._bindings.get(handle.id)
        return coordinator.phase if coordinator is not None else None

    def is_bound(self, handle: SurfaceHandle) -> bool:
        return handle.id in self._bindings

    def close(self) -> None:
        for coordinator in list(self._bindings.values()):
            coordinator.close()
        self._bindings.clear()

    def _lookup(self, handle: SurfaceHandle, operation: str) -> Optional[PassCoordinator]:
        coordinator = self._bindings.get(handle.id)
        if coordinator is None:
            self._ignored(handle, operation)
        return coordinator

    def _ignored(self, handle: SurfaceHandle, operation: str) -> None:
        telemetry.record_event(
            "surface.unbound_call",
            level="debug",
            data={"surface": handle.name, "operation": operation},
            logger_name=self.logger_name,
        )


__all__ = ["AutoGrowEngine", "HeightListener", "SurfaceHandle"]
