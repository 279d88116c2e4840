from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Callable, List, Set, Tuple

from autogrow_engine.adapters.textual import (
    EXPANDED_CLASS,
    TextualGrowController,
    TextualScheduler,
    TextualUIHooks,
)
from autogrow_engine.engine import AutoGrowEngine, ContentCause, HeightChanged
from autogrow_engine.scheduling import FrameScheduler
from autogrow_engine.surface import SurfaceConfig

CONFIG = SurfaceConfig(
    min_height=3,
    max_height=10,
    debounce_ms=10,
    transition_duration_ms=120,
    transition_delta_threshold=1,
)


class FakeStyles:
    def __init__(self) -> None:
        self._height: Any = None
        self.overflow_y: Any = None
        self.gutter = SimpleNamespace(height=2)
        self.writes: List[Any] = []
        self.animations: List[Tuple[str, Any, Any, float]] = []

    @property
    def height(self) -> Any:
        return self._height

    @height.setter
    def height(self, value: Any) -> None:
        self._height = value
        self.writes.append(value)

    def animate(self, attribute: str, value: Any, *, duration: float) -> None:
        # Textual animates from whatever the style holds right now.
        self.animations.append((attribute, getattr(self, attribute), value, duration))
        setattr(self, attribute, value)


class FakeTextArea:
    """Just enough of ``TextArea`` for the surface: one row per line."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.styles = FakeStyles()
        self.classes: Set[str] = set()
        self.scroll_y = 0.0
        self.scrolls: List[float] = []

    @property
    def virtual_size(self) -> SimpleNamespace:
        return SimpleNamespace(height=len(self.text.split("\n")))

    def set_class(self, add: bool, name: str) -> None:
        if add:
            self.classes.add(name)
        else:
            self.classes.discard(name)

    def scroll_to(self, *, y: float, animate: bool) -> None:
        self.scroll_y = y
        self.scrolls.append(y)

    def load_text(self, text: str) -> None:
        self.text = text

    def clear(self) -> None:
        self.text = ""


class FakeTimer:
    def __init__(self) -> None:
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


class FakeNode:
    def __init__(self) -> None:
        self.timers: List[Tuple[float, Callable[[], object], FakeTimer]] = []
        self.after_refresh: List[Callable[[], object]] = []

    def set_timer(self, delay: float, callback: Callable[[], object]) -> FakeTimer:
        timer = FakeTimer()
        self.timers.append((delay, callback, timer))
        return timer

    def call_after_refresh(self, callback: Callable[[], object]) -> None:
        self.after_refresh.append(callback)


def make_controller(
    text: str = "",
) -> tuple[TextualGrowController, FakeTextArea, List[str], List[HeightChanged], List[str]]:
    widget = FakeTextArea(text)
    statuses: List[str] = []
    events: List[HeightChanged] = []
    logs: List[str] = []
    hooks = TextualUIHooks(
        height_changed=events.append,
        update_status=statuses.append,
        log=logs.append,
    )
    engine = AutoGrowEngine(FrameScheduler(clock=lambda: 0.0))
    controller = TextualGrowController(engine, widget, CONFIG, hooks)
    return controller, widget, statuses, events, logs


def test_controller_binds_at_minimum_height() -> None:
    _, widget, statuses, events, _ = make_controller()

    assert widget.styles.height == 3
    assert widget.styles.overflow_y == "hidden"
    assert widget.styles.animations == []
    assert statuses == ["height 3"]
    assert events == [HeightChanged(old=None, new=3, overflowing=False)]


def test_set_text_grows_with_animation() -> None:
    controller, widget, _, events, _ = make_controller()

    controller.set_text("\n".join(["line"] * 5))

    assert widget.styles.height == 7
    assert widget.styles.animations[-1] == ("height", 3, 7, 0.12)
    assert EXPANDED_CLASS in widget.classes
    assert events[-1] == HeightChanged(old=3, new=7, overflowing=False)


def test_animations_start_from_previous_height() -> None:
    controller, widget, _, _, _ = make_controller("a\nb\nc\nd")
    assert widget.styles.height == 6

    controller.set_text("\n".join(["line"] * 8))
    controller.set_text("short")

    assert [start for _, start, _, _ in widget.styles.animations] == [6, 10]
    assert [end for _, _, end, _ in widget.styles.animations] == [10, 3]
    assert 0 not in widget.styles.writes


def test_overflow_enables_scrolling_and_restores_offset() -> None:
    controller, widget, statuses, _, _ = make_controller()
    controller.set_text("\n".join(["line"] * 20))
    assert widget.styles.overflow_y == "auto"
    assert statuses[-1] == "height 10 (scrolling)"

    widget.scroll_y = 6
    controller.set_text("\n".join(["line"] * 21))

    assert widget.styles.height == 10
    assert widget.scrolls[-1] == 6


def test_clear_resets_without_animation() -> None:
    controller, widget, _, events, _ = make_controller("a\nb\nc\nd")
    animations = len(widget.styles.animations)

    controller.clear()

    assert widget.text == ""
    assert widget.styles.height == 3
    assert widget.styles.overflow_y == "hidden"
    assert EXPANDED_CLASS not in widget.classes
    assert len(widget.styles.animations) == animations
    assert events[-1] == HeightChanged(old=6, new=3, overflowing=False)


def test_key_mapping_selects_causes() -> None:
    controller, _, _, _, logs = make_controller("text")

    assert controller.handle_key("backspace") is ContentCause.DELETE
    assert controller.handle_key("ctrl+v") is ContentCause.PASTE
    assert controller.handle_key("shift+enter") is ContentCause.NEWLINE
    assert controller.handle_key("ctrl+x") is ContentCause.CUT
    assert controller.handle_key("ctrl+h") is ContentCause.DELETE
    assert controller.handle_key("enter") is None
    assert controller.handle_key("a") is None
    assert any(line.startswith("signal ->") for line in logs)


def test_paste_waits_for_its_delay() -> None:
    controller, widget, _, _, logs = make_controller("a")

    widget.text = "\n".join(["x"] * 4)
    controller.handle_paste("x\nx\nx")

    assert "cause='paste'" in logs[-1]
    assert "chars=5" in logs[-1]
    assert widget.styles.height == 3



def test_typing_is_debounced_through_engine() -> None:
    widget = FakeTextArea("a")
    ticks = {"now": 0.0}
    scheduler = FrameScheduler(clock=lambda: ticks["now"])
    controller = TextualGrowController(AutoGrowEngine(scheduler), widget, CONFIG)

    widget.text = "a\nb\nc"
    controller.handle_changed()
    assert widget.styles.height == 3

    ticks["now"] = 0.05
    scheduler.tick()

    assert widget.styles.height == 5


def test_close_unbinds() -> None:
    controller, widget, _, events, logs = make_controller("a")
    controller.close()

    widget.text = "a\nb\nc\nd\ne"
    controller.handle_signal(ContentCause.EXTERNAL)

    assert widget.styles.height == 3
    assert len(events) == 1
    assert "bound=False" in logs[-1]


def test_textual_scheduler_uses_timers_and_refresh() -> None:
    node = FakeNode()
    scheduler = TextualScheduler(node)
    fired: List[str] = []

    timer_call = scheduler.schedule_after(25, lambda: fired.append("timer"))
    frame_call = scheduler.schedule_next_frame(lambda: fired.append("frame"))
    delay, callback, timer = node.timers[0]
    assert delay == 0.025

    timer_call.cancel()
    assert timer.stopped is True
    callback()
    node.after_refresh[0]()

    assert fired == ["frame"]
    assert frame_call.active is False
