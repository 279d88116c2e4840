"""Executable Textual chat composer that grows with its content."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical, VerticalScroll
    from textual.message import Message
    from textual.widgets import Footer, Header, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use autogrow_engine.adapters.textual.app"
    ) from exc

from autogrow_engine.engine import AutoGrowEngine
from autogrow_engine.runtime import telemetry
from autogrow_engine.surface import ConfigurationError, SurfaceConfig

from .controller import TextualGrowController, TextualScheduler, TextualUIHooks

DEFAULT_CONFIG = SurfaceConfig(
    min_height=3,
    max_height=10,
    debounce_ms=10,
    transition_duration_ms=120,
    transition_delta_threshold=1,
)


class ComposerTextArea(TextArea):
    """TextArea that reports keys and pastes; Enter sends, Shift+Enter breaks."""

    class KeyHandled(Message):
        def __init__(self, key: str) -> None:
            super().__init__()
            self.key = key

    class Pasted(Message):
        def __init__(self, text: str) -> None:
            super().__init__()
            self.text = text

    class Submitted(Message):
        def __init__(self, text: str) -> None:
            super().__init__()
            self.text = text

    async def _on_key(self, event: events.Key) -> None:
        if event.key == "enter":
            event.prevent_default()
            event.stop()
            self.post_message(self.Submitted(self.text))
            return
        if event.key in {"shift+enter", "ctrl+j"}:
            event.prevent_default()
            event.stop()
            self.insert("\n")
        else:
            await super()._on_key(event)
        self.post_message(self.KeyHandled(event.key))

    async def _on_paste(self, event: events.Paste) -> None:
        await super()._on_paste(event)
        self.post_message(self.Pasted(event.text))


class AutoGrowDemoApp(App[None]):
    """Message log above a composer that grows up to a cap, then scrolls."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#history {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#composer {
		height: 3;
		border: round $primary;
		overflow-y: hidden;
	}

	#composer.-expanded {
		border: round $success;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+l", "fill", "Sample text"),
    ]

    def __init__(self, *, config: SurfaceConfig = DEFAULT_CONFIG) -> None:
        super().__init__()
        self.config = config
        self.engine: AutoGrowEngine | None = None
        self.controller: TextualGrowController | None = None
        self._history: VerticalScroll | None = None
        self._status: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical():
            self._history = VerticalScroll(id="history")
            yield self._history
            yield ComposerTextArea(id="composer", soft_wrap=True)
            self._status = Static("", id="status-line")
            yield self._status
        yield Footer()

    def on_mount(self) -> None:
        composer = self.query_one("#composer", ComposerTextArea)
        self.engine = AutoGrowEngine(TextualScheduler(self))
        hooks = TextualUIHooks(update_status=self._update_status)
        self.controller = TextualGrowController(
            self.engine, composer, self.config, hooks
        )
        composer.focus()

    def on_unmount(self) -> None:
        if self.controller is not None:
            self.controller.close()
            self.controller = None

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if self.controller is not None:
            self.controller.handle_changed()

    def on_composer_text_area_key_handled(
        self, event: ComposerTextArea.KeyHandled
    ) -> None:
        if self.controller is not None:
            self.controller.handle_key(event.key)

    def on_composer_text_area_pasted(self, event: ComposerTextArea.Pasted) -> None:
        if self.controller is not None:
            self.controller.handle_paste(event.text)

    def on_composer_text_area_submitted(
        self, event: ComposerTextArea.Submitted
    ) -> None:
        text = event.text.strip()
        if not text or self.controller is None:
            return
        if self._history is not None:
            self._history.mount(Static(text))
            self._history.scroll_end(animate=False)
        self.controller.clear()

    def action_fill(self) -> None:
        if self.controller is not None:
            self.controller.set_text("\n".join(f"line {n}" for n in range(1, 16)))

    def _update_status(self, status: str) -> None:
        if self._status is not None:
            self._status.update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the auto-growing composer Textual demo."
    )
    parser.add_argument("--min-height", type=float, help="Resting height in cells")
    parser.add_argument("--max-height", type=float, help="Height cap in cells")
    parser.add_argument("--debounce-ms", type=float, help="Typing debounce")
    parser.add_argument(
        "--transition-ms", type=float, help="Animation length for height changes"
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        help="Telemetry preset (default: environment driven)",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> SurfaceConfig:
    """Defaults < AUTOGROW_ENGINE_* environment < command line flags."""

    overrides = {
        key: value
        for key, value in (
            ("min_height", args.min_height),
            ("max_height", args.max_height),
            ("debounce_ms", args.debounce_ms),
            ("transition_duration_ms", args.transition_ms),
        )
        if value is not None
    }
    return SurfaceConfig.from_env(base=DEFAULT_CONFIG).with_overrides(**overrides)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    try:
        config = build_config(args)
    except ConfigurationError as exc:
        raise SystemExit(f"invalid configuration: {exc}") from exc
    AutoGrowDemoApp(config=config).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
