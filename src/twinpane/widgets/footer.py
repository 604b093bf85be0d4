from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

from twinpane.utils.error_handling import log_ui_error


class Footer(Static):
    """Footer line with contextual keybinding hints (rich markup)."""

    DEFAULT_CSS = """
    Footer {
        dock: bottom;
        height: 1;
        background: $panel-darken-2;
        padding: 0 1;
    }
    """

    def __init__(self, text: str | None = None, classes: str = "footer") -> None:
        content = text if text is not None else " [orange1]Ctrl+Q[/orange1] Quit"
        super().__init__(Text.from_markup(content), classes=classes)

    def set_text(self, text: str) -> None:
        try:
            self.update(Text.from_markup(text))
        except (AttributeError, RuntimeError) as e:
            log_ui_error("footer", "updating", e)
