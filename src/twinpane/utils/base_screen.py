"""Base screen class shared by TwinPane screens.

Standardizes the Header + main content + Footer composition so screens
only describe their own content and footer hints.
"""

from textual.app import ComposeResult
from textual.css.query import NoMatches
from textual.screen import Screen

from twinpane.utils.error_handling import log_ui_error
from twinpane.widgets.footer import Footer
from twinpane.widgets.header import Header, page_title


class BaseScreen(Screen):
    """Base class for TwinPane screens.

    The standard structure is:
    - Header with page name and clock
    - Main content area (defined by subclass)
    - Footer with contextual text
    """

    def __init__(self, page_name: str):
        """Initialize base screen with page name.

        Args:
            page_name: Name to display in header and title
        """
        super().__init__()
        self.page_name = page_name
        self.title = page_title(page_name)

    def compose(self) -> ComposeResult:
        """Standard composition: header + main content + footer.

        Subclasses override compose_main_content() rather than this method.
        """
        yield Header(page_name=self.page_name, show_clock=True)
        yield from self.compose_main_content()
        yield Footer(text=self.get_footer_text())

    def compose_main_content(self) -> ComposeResult:
        """Define the main content area for this screen."""
        raise NotImplementedError("Subclasses must implement compose_main_content()")

    def get_footer_text(self) -> str:
        """Get footer text for this screen."""
        raise NotImplementedError("Subclasses must implement get_footer_text()")

    def update_footer(self) -> None:
        """Re-render the footer from get_footer_text()."""
        try:
            self.query_one(Footer).set_text(self.get_footer_text())
        except (NoMatches, AttributeError, RuntimeError) as e:
            log_ui_error("footer", "refreshing", e)

    def safe_set_focus(self, widget) -> None:
        """Set focus on widget, logging instead of raising."""
        try:
            self.set_focus(widget)
        except (AttributeError, RuntimeError) as e:
            log_ui_error("screen", "setting focus", e)

    async def on_mount(self):
        """Set the screen title; subclasses should call super().on_mount()."""
        self.title = page_title(self.page_name)
