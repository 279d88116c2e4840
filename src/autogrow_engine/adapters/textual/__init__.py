"""Textual bindings; ``app`` is imported lazily since it needs textual."""

from .controller import (
    EXPANDED_CLASS,
    KEY_CAUSES,
    TextAreaSurface,
    TextualGrowController,
    TextualScheduler,
    TextualUIHooks,
)

__all__ = [
    "EXPANDED_CLASS",
    "KEY_CAUSES",
    "TextAreaSurface",
    "TextualGrowController",
    "TextualScheduler",
    "TextualUIHooks",
]
