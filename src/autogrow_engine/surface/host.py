"""Headless surfaces for hosts without a layout engine, and for tests.

Both variants lay text out on a fixed column grid and behave like a browser
text box in the one way the engine cares about: the reported extent never
drops below the currently applied height, so shrinking only shows up after
the height has been collapsed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

import wcwidth as _wcwidth


@dataclass(frozen=True, slots=True)
class SurfaceOp:
    """One recorded mutation, kept for inspection."""

    kind: str
    value: object
    animated: bool = False


def cell_width(char: str) -> int:
    width = _wcwidth.wcwidth(char)
    return width if width > 0 else 0


def wrapped_rows(line: str, columns: int) -> int:
    """Rows needed for one physical line broken at ``columns`` cells."""

    if columns <= 0 or not line:
        return 1
    rows = 1
    used = 0
    for char in line:
        width = cell_width(char)
        if used + width > columns and used > 0:
            rows += 1
            used = 0
        used += width
    return rows


def count_rows(text: str, columns: int) -> int:
    return sum(wrapped_rows(line, columns) for line in text.split("\n"))


class _HeadlessSurface:
    def __init__(
        self,
        *,
        line_height: float = 20,
        columns: int = 40,
        padding: float = 2,
    ) -> None:
        if line_height <= 0:
            raise ValueError("line_height must be positive")
        self.line_height = line_height
        self.columns = columns
        self.padding = padding
        self.applied_height: float = 0
        self.overflow_enabled = False
        self.expanded = False
        self.transitions_enabled = True
        self.scroll_offset: float = 0
        self.ops: List[SurfaceOp] = []

    # -- layout ----------------------------------------------------------
    def content_extent(self) -> float:  # pragma: no cover - abstract override
        raise NotImplementedError

    def _max_scroll(self) -> float:
        return max(0.0, self.content_extent() - self.applied_height)

    def scroll_to(self, offset: float) -> None:
        """Simulate the user scrolling inside the surface."""

        self.scroll_offset = min(max(0.0, offset), self._max_scroll())

    def heights(self, *, include_collapse: bool = False) -> list[float]:
        return [
            float(op.value)  # type: ignore[arg-type]
            for op in self.ops
            if op.kind == "height" and (include_collapse or float(op.value) > 0)  # type: ignore[arg-type]
        ]

    # -- Surface protocol ------------------------------------------------
    def get_content(self) -> str:  # pragma: no cover - abstract override
        raise NotImplementedError

    def get_natural_extent(self) -> float:
        return max(self.content_extent(), self.applied_height)

    def apply_height(self, height: float) -> None:
        self.ops.append(SurfaceOp("height", height, self.transitions_enabled))
        self.applied_height = height
        if height <= 0:
            # A collapsed box has nothing to keep scrolled.
            self.scroll_offset = 0
        else:
            self.scroll_offset = min(self.scroll_offset, self._max_scroll())

    def set_overflow_enabled(self, enabled: bool) -> None:
        self.ops.append(SurfaceOp("overflow", enabled))
        self.overflow_enabled = enabled

    def set_expanded(self, expanded: bool) -> None:
        self.expanded = expanded

    def set_transition_enabled(self, enabled: bool) -> None:
        self.transitions_enabled = enabled

    def capture_scroll(self) -> float:
        return self.scroll_offset

    def restore_scroll(self, offset: float) -> None:
        self.ops.append(SurfaceOp("scroll", offset))
        self.scroll_to(offset)


class TextFieldSurface(_HeadlessSurface):
    """Plain multi-line field: one text value, wrapped at ``columns``."""

    def __init__(self, text: str = "", **layout: float) -> None:
        super().__init__(**layout)  # type: ignore[arg-type]
        self.text = text

    def set_text(self, text: str) -> None:
        self.text = text

    def content_extent(self) -> float:
        rows = count_rows(self.text, self.columns)
        return rows * self.line_height + 2 * self.padding

    def get_content(self) -> str:
        return self.text


class EditableRegionSurface(_HeadlessSurface):
    """Block-structured editable region separated by blank lines."""

    def __init__(
        self,
        blocks: Iterable[str] = (),
        *,
        block_spacing: float = 8,
        **layout: float,
    ) -> None:
        super().__init__(**layout)  # type: ignore[arg-type]
        self.block_spacing = block_spacing
        self.blocks: list[str] = list(blocks)

    def set_blocks(self, blocks: Sequence[str]) -> None:
        self.blocks = list(blocks)

    def set_text(self, text: str) -> None:
        self.blocks = text.split("\n\n") if text else []

    def content_extent(self) -> float:
        blocks = self.blocks or [""]
        rows = sum(count_rows(block, self.columns) for block in blocks)
        spacing = self.block_spacing * (len(blocks) - 1)
        return rows * self.line_height + spacing + 2 * self.padding

    def get_content(self) -> str:
        return "\n\n".join(self.blocks)


__all__ = [
    "EditableRegionSurface",
    "SurfaceOp",
    "TextFieldSurface",
    "cell_width",
    "count_rows",
    "wrapped_rows",
]
