"""Rendering of finalized panes as a two-column, line-numbered view.

Both sides are laid out as one rich grid with a row per line pair, so the
equal-length invariant of the panes turns directly into visual alignment and
the whole view scrolls as a single unit.
"""

from __future__ import annotations

from itertools import zip_longest
from typing import Optional

from rich.console import Console, ConsoleOptions, RenderResult
from rich.measure import Measurement
from rich.style import Style
from rich.table import Table
from rich.text import Text
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import Static

from twinpane.utils.config import config
from twinpane.utils.diff_model import NEWLINE, DiffLine, SpanState
from twinpane.utils.error_handling import log_ui_error
from twinpane.utils.pane_builder import Panes

SPAN_STYLES: dict[SpanState, Style] = {
    SpanState.ADDED: Style(color="bright_white", bgcolor="#1f4d2b"),
    SpanState.REMOVED: Style(color="bright_white", bgcolor="#5c1f26"),
    SpanState.UNCHANGED: Style(),
    SpanState.SPACER: Style(bgcolor="grey15"),
}
LINE_NUMBER_STYLE = Style(dim=True)
GUTTER_WIDTH = 9
SEPARATOR = Text("│", style="dim")


def format_line_number(n: Optional[int]) -> str:
    # 6 digits + " | "; unnumbered rows keep the spacing but draw no pipe
    return f"{n:>6} | " if n is not None else " " * GUTTER_WIDTH


class PaneLine:
    """One pane row as a rich renderable.

    If the row's last span ends in a newline, the remainder of the cell is
    filled in that span's style so the highlight runs to the pane edge.
    """

    def __init__(self, text: Text, fill_style: Optional[Style] = None) -> None:
        self.text = text
        self.fill_style = fill_style

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        width = options.max_width
        text = self.text.copy()
        text.truncate(width, overflow="ellipsis")
        if self.fill_style is not None and text.cell_len < width:
            text.append(" " * (width - text.cell_len), style=self.fill_style)
        text.no_wrap = True
        yield text

    def __rich_measure__(self, console: Console, options: ConsoleOptions) -> Measurement:
        return Measurement(1, max(1, self.text.cell_len))


def render_line(line: Optional[DiffLine], max_chars: Optional[int] = None) -> PaneLine:
    """Build the gutter and styled spans for one line (``None`` renders blank)."""
    if line is None:
        return PaneLine(Text(" " * GUTTER_WIDTH))

    limit = config.max_preview_chars if max_chars is None else max_chars
    text = Text(end="")
    text.append(format_line_number(line.line_number), style=LINE_NUMBER_STYLE)
    used = 0
    for span in line.spans:
        content = span.content[:-1] if span.ends_with_newline else span.content
        if not content:
            continue
        room = limit - used
        if room <= 0:
            break
        if len(content) > room:
            text.append(content[:room] + " …", style=SPAN_STYLES[span.state])
            used = limit
            break
        text.append(content, style=SPAN_STYLES[span.state])
        used += len(content)

    last = line.last_span()
    fill = SPAN_STYLES[last.state] if last is not None and last.content.endswith(NEWLINE) else None
    return PaneLine(text, fill_style=fill)


def render_side_by_side(panes: Panes, max_chars: Optional[int] = None) -> Table:
    """Lay out both panes as a grid: left | separator | right, one row per line pair."""
    table = Table.grid(expand=True, padding=(0, 1))
    table.add_column(ratio=1, no_wrap=True)
    table.add_column(width=1, no_wrap=True)
    table.add_column(ratio=1, no_wrap=True)
    for left_line, right_line in zip_longest(panes.left, panes.right):
        table.add_row(render_line(left_line, max_chars), SEPARATOR, render_line(right_line, max_chars))
    return table


class SideBySideView(VerticalScroll):
    """Scrollable host for the side-by-side grid."""

    DEFAULT_CSS = """
    SideBySideView {
        height: 1fr;
        border: round $panel-lighten-1;
        scrollbar-gutter: stable;
    }
    SideBySideView > .side-by-side-body {
        width: 100%;
        height: auto;
    }
    """

    def __init__(self, *, id: Optional[str] = None, classes: Optional[str] = None) -> None:
        super().__init__(id=id, classes=classes)
        self._body: Optional[Static] = None
        self._panes: Optional[Panes] = None

    def compose(self) -> ComposeResult:
        self._body = Static("", classes="side-by-side-body")
        yield self._body

    @property
    def panes(self) -> Optional[Panes]:
        return self._panes

    def show(self, panes: Panes) -> None:
        """Replace the displayed comparison, keeping the scroll position."""
        self._panes = panes
        if self._body is None:
            return
        try:
            self._body.update(render_side_by_side(panes))
        except (AttributeError, RuntimeError) as e:
            log_ui_error("diff view", "updating", e)
