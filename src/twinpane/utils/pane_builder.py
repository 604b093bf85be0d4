"""Turn a diff operation stream into two aligned, numbered panes.

The builder walks the operations once, splitting each text on newlines and
appending spans to the left and right ``Content``. Crossing a newline always
advances *both* sides together: the side that did not consume a source line
gets a spacer row instead. That keeps the two line lists the same length at
every step, so the panes can be scrolled in lock-step without any separate
index mapping.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, NamedTuple

from .config import config
from .diff_engine import DiffOperation, Operation, OperationLike, coerce_operation, compute_operations
from .diff_model import NEWLINE, Content, DiffSpan, SpanState
from .logger import log

_AFTER_NEWLINE = re.compile(r"(?<=\n)")


class Panes(NamedTuple):
    """Left (original) and right (modified) sides of a comparison."""

    left: Content
    right: Content


# (left advances a numbered line, right advances a numbered line) per operation
_ADVANCE = {
    Operation.EQUAL: (True, True),
    Operation.INSERT: (False, True),
    Operation.DELETE: (True, False),
}


def split_keep_newlines(text: str) -> list[str]:
    """Split after every newline, keeping the newline on the preceding segment.

    ``"a\\nb"`` -> ``["a\\n", "b"]``; ``"a\\n"`` -> ``["a\\n"]``; ``""`` -> ``[""]``.
    """
    segments = _AFTER_NEWLINE.split(text)
    if len(segments) > 1 and segments[-1] == "":
        segments.pop()
    return segments


class PaneBuilder:
    """Streams diff operations into a pair of ``Content`` objects."""

    def __init__(self) -> None:
        self.left = Content()
        self.right = Content()

    def feed(self, item: OperationLike) -> None:
        """Process one ``(operation, text)`` pair."""
        op = coerce_operation(item)
        for span_text in split_keep_newlines(op.text):
            self._append(op.operation, span_text)
            if span_text.endswith(NEWLINE):
                self._advance(*_ADVANCE[op.operation])

    def feed_all(self, operations: Iterable[OperationLike]) -> None:
        for item in operations:
            self.feed(item)

    def finish(self) -> Panes:
        """Number both sides and hand them over; the builder is spent afterwards."""
        self.left.compute_line_numbers()
        self.right.compute_line_numbers()
        return Panes(self.left, self.right)

    def _append(self, operation: Operation, span_text: str) -> None:
        if operation is Operation.EQUAL:
            self.left.last().add_span(DiffSpan(span_text, SpanState.UNCHANGED))
            self.right.last().add_span(DiffSpan(span_text, SpanState.UNCHANGED))
        elif operation is Operation.INSERT:
            self.right.last().add_span(DiffSpan(span_text, SpanState.ADDED))
        else:
            self.left.last().add_span(DiffSpan(span_text, SpanState.REMOVED))

    def _advance(self, left_numbered: bool, right_numbered: bool) -> None:
        self.left.add_line(left_numbered)
        self.right.add_line(right_numbered)
        if len(self.left) != len(self.right):
            log.error(f"[PANES] Sides out of step: left={len(self.left)} right={len(self.right)}")


def build_panes(operations: Iterable[OperationLike]) -> Panes:
    """Pure transform: operations -> finalized (left, right) panes."""
    builder = PaneBuilder()
    builder.feed_all(operations)
    return builder.finish()


def _render_panes_uncached(text_a: str, text_b: str) -> Panes:
    operations: list[DiffOperation] = compute_operations(text_a, text_b)
    panes = build_panes(operations)
    log.debug(f"[PANES] Built {len(panes.left)} rows from {len(operations)} operations")
    return panes


_render_panes_cached = lru_cache(maxsize=config.render_cache_size)(_render_panes_uncached)


def render_panes(text_a: str, text_b: str) -> Panes:
    """Diff two texts and build panes, memoized on ``(text_a, text_b)``.

    The returned panes are finalized and shared between callers with the
    same inputs; treat them as read-only.
    """
    return _render_panes_cached(text_a, text_b)


def clear_render_cache() -> None:
    _render_panes_cached.cache_clear()


def render_cache_info():
    return _render_panes_cached.cache_info()
