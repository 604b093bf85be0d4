from __future__ import annotations

from rich.console import RenderableType
from rich.table import Table
from rich.text import Text
from textual.widgets import Static

from twinpane.utils.converters import ConversionResult


def render_conversion(result: ConversionResult) -> RenderableType:
    """Labeled rows for a successful conversion, or the inline error message."""
    if result.error is not None:
        return Text(result.error, style="bold red")

    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold", no_wrap=True)
    table.add_column()
    for row in result.rows:
        style = "dim" if row.dimmed else ""
        table.add_row(Text(f"{row.label}:", style=style), Text(row.value, style=style))
    return table


class ConversionView(Static):
    """Output area for the single-input tools."""

    DEFAULT_CSS = """
    ConversionView {
        width: 100%;
        height: auto;
        padding: 1 2;
    }
    """

    def show(self, result: ConversionResult) -> None:
        self.update(render_conversion(result))
