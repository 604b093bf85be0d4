"""Line model for one side of a side-by-side comparison.

A ``Content`` is an ordered list of ``DiffLine`` rows, each holding styled
``DiffSpan`` fragments. Two ``Content`` objects (left/original and
right/modified) are grown in lock-step by the pane builder, then finalized
once to assign visible line numbers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

NEWLINE = "\n"


class SpanState(Enum):
    """Classification of a span, mapped to a visual style by the renderer."""

    ADDED = "added"
    REMOVED = "removed"
    UNCHANGED = "unchanged"
    SPACER = "spacer"


@dataclass(frozen=True)
class DiffSpan:
    """An atomic styled text fragment. ``content`` may be empty or just a newline."""

    content: str
    state: SpanState

    @property
    def ends_with_newline(self) -> bool:
        return self.content.endswith(NEWLINE)


@dataclass
class DiffLine:
    """One rendered row: spans plus numbering state.

    ``show_next_line_number`` is recorded when the row is closed by
    ``Content.add_line`` and says whether the row ended a source line on this
    side, so the following row starts a new numbered one.
    ``line_number`` is filled in by ``Content.compute_line_numbers``.
    """

    spans: list[DiffSpan] = field(default_factory=list)
    show_next_line_number: Optional[bool] = None
    line_number: Optional[int] = None
    _frozen: bool = field(default=False, init=False, repr=False, compare=False)

    def add_span(self, span: DiffSpan) -> None:
        if self._frozen:
            raise RuntimeError("cannot add spans to a finalized line")
        self.spans.append(span)

    def last_span(self) -> Optional[DiffSpan]:
        return self.spans[-1] if self.spans else None

    @property
    def text(self) -> str:
        """Concatenated span contents, including any newline and spacer characters."""
        return "".join(span.content for span in self.spans)

    @property
    def has_text(self) -> bool:
        """True when some non-spacer span carries characters."""
        return any(span.content and span.state is not SpanState.SPACER for span in self.spans)

    @property
    def is_numbered(self) -> bool:
        return self.line_number is not None

    def freeze(self) -> None:
        self._frozen = True


class Content:
    """Ordered, never-empty sequence of lines for one side of the comparison.

    The last line is always the "current" line, the only one spans may be
    appended to. Lifecycle: created with a single empty line, grown by the
    pane builder, then made immutable by ``compute_line_numbers``.
    """

    def __init__(self) -> None:
        self.lines: list[DiffLine] = [DiffLine()]
        self._finalized = False

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[DiffLine]:
        return iter(self.lines)

    def __repr__(self) -> str:
        return f"Content(lines={len(self.lines)}, finalized={self._finalized})"

    @property
    def finalized(self) -> bool:
        return self._finalized

    def last(self) -> DiffLine:
        """Return the current line."""
        return self.lines[-1]

    def add_line(self, show_line_number: bool) -> None:
        """Close the current line and start a new empty one.

        When ``show_line_number`` is false the closed line gets a spacer
        newline so it still renders as a full-width neutral row.
        """
        if self._finalized:
            raise RuntimeError("cannot add lines to finalized content")
        current = self.last()
        if not show_line_number:
            current.add_span(DiffSpan(NEWLINE, SpanState.SPACER))
        current.show_next_line_number = show_line_number
        self.lines.append(DiffLine())

    def compute_line_numbers(self) -> None:
        """Assign visible line numbers in one forward pass.

        A source line starts at the first row and after every row closed with
        ``show_next_line_number`` true. Its number goes to the first of its
        rows that carries text or was closed by its own newline; filler rows
        made only of spacers are skipped. A source line with no text at all
        (an empty last line) is numbered on the trailing row.
        """
        if self._finalized:
            raise RuntimeError("line numbers already computed")
        line_number = 1
        pending = True
        last_index = len(self.lines) - 1
        for index, line in enumerate(self.lines):
            if pending and (line.has_text or line.show_next_line_number or index == last_index):
                line.line_number = line_number
                line_number += 1
                pending = False
            if line.show_next_line_number:
                pending = True
            line.freeze()
        self._finalized = True

    def numbered_lines(self) -> Iterator[DiffLine]:
        """Lines that received a visible number, in order."""
        return (line for line in self.lines if line.is_numbered)

    @property
    def line_count(self) -> int:
        """Number of numbered lines (the number of source lines on this side)."""
        return sum(1 for _ in self.numbered_lines())
