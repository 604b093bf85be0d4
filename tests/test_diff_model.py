"""Tests for the line model: spans, lines and the numbering pass."""

import dataclasses

import pytest

from twinpane.utils.diff_model import NEWLINE, Content, DiffLine, DiffSpan, SpanState


class TestDiffSpan:
    """Test the DiffSpan value object."""

    def test_span_is_immutable(self):
        span = DiffSpan("abc", SpanState.ADDED)
        with pytest.raises(dataclasses.FrozenInstanceError):
            span.content = "xyz"

    def test_ends_with_newline(self):
        assert DiffSpan("a\n", SpanState.UNCHANGED).ends_with_newline
        assert DiffSpan(NEWLINE, SpanState.SPACER).ends_with_newline
        assert not DiffSpan("a", SpanState.REMOVED).ends_with_newline
        assert not DiffSpan("", SpanState.REMOVED).ends_with_newline

    def test_state_values(self):
        assert {s.value for s in SpanState} == {"added", "removed", "unchanged", "spacer"}


class TestDiffLine:
    """Test DiffLine accumulation."""

    def test_new_line_is_empty(self):
        line = DiffLine()
        assert line.spans == []
        assert line.last_span() is None
        assert line.show_next_line_number is None
        assert line.line_number is None
        assert not line.is_numbered

    def test_text_joins_spans(self):
        line = DiffLine()
        line.add_span(DiffSpan("foo", SpanState.UNCHANGED))
        line.add_span(DiffSpan("bar\n", SpanState.ADDED))
        assert line.text == "foobar\n"
        assert line.last_span() == DiffSpan("bar\n", SpanState.ADDED)

    def test_frozen_line_rejects_spans(self):
        line = DiffLine()
        line.freeze()
        with pytest.raises(RuntimeError):
            line.add_span(DiffSpan("x", SpanState.ADDED))


class TestContent:
    """Test Content growth and line numbering."""

    def test_starts_with_one_empty_line(self):
        content = Content()
        assert len(content) == 1
        assert content.last().spans == []
        assert not content.finalized

    def test_add_line_records_flag_and_appends(self):
        content = Content()
        content.last().add_span(DiffSpan("a\n", SpanState.UNCHANGED))
        content.add_line(True)
        assert len(content) == 2
        assert content.lines[0].show_next_line_number is True
        assert content.lines[0].text == "a\n"
        assert content.last().spans == []

    def test_add_line_without_number_appends_spacer(self):
        content = Content()
        content.add_line(False)
        first = content.lines[0]
        assert first.show_next_line_number is False
        assert first.spans == [DiffSpan(NEWLINE, SpanState.SPACER)]

    def test_spacer_only_row_is_not_numbered(self):
        content = Content()
        content.add_line(False)
        content.compute_line_numbers()
        assert [line.line_number for line in content] == [None, 1]

    def test_number_goes_to_first_row_with_text(self):
        content = Content()
        content.last().add_span(DiffSpan("", SpanState.REMOVED))
        content.add_line(False)
        content.last().add_span(DiffSpan("x", SpanState.ADDED))
        content.add_line(False)
        content.compute_line_numbers()
        assert not content.lines[0].has_text
        assert content.lines[1].has_text
        assert [line.line_number for line in content] == [None, 1, None]

    def test_numbering_skips_filler_rows(self):
        content = Content()
        for flag in (True, False, True, True):
            content.add_line(flag)
        content.compute_line_numbers()
        # flags:   T     F     T     T    (trailing line unclosed)
        # rows:    0     1     2     3     4
        assert [line.line_number for line in content] == [1, None, 2, 3, 4]
        assert content.line_count == 4
        assert [line.line_number for line in content.numbered_lines()] == [1, 2, 3, 4]

    def test_unclosed_trailing_line_does_not_number_a_successor(self):
        content = Content()
        content.compute_line_numbers()
        assert content.lines[0].line_number == 1
        assert content.line_count == 1

    def test_finalize_is_one_shot(self):
        content = Content()
        content.compute_line_numbers()
        assert content.finalized
        with pytest.raises(RuntimeError):
            content.compute_line_numbers()

    def test_finalized_content_is_immutable(self):
        content = Content()
        content.last().add_span(DiffSpan("a", SpanState.UNCHANGED))
        content.compute_line_numbers()
        with pytest.raises(RuntimeError):
            content.add_line(True)
        with pytest.raises(RuntimeError):
            content.last().add_span(DiffSpan("b", SpanState.ADDED))
