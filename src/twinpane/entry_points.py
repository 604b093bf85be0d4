from __future__ import annotations

import argparse
import sys

from rich.console import Console
from textual.app import App

from twinpane.screens.compare_screen import CompareScreen
from twinpane.utils.config import SessionConfig
from twinpane.utils.converters import run_conversion
from twinpane.utils.detect import detect_mode
from twinpane.utils.io import safe_read_file
from twinpane.utils.logger import log
from twinpane.utils.modes import Mode, mode_choices, parse_mode
from twinpane.utils.pane_builder import render_panes
from twinpane.utils.validation import ValidationError, validate_mode, validate_session_paths
from twinpane.widgets.conversion_view import render_conversion
from twinpane.widgets.diff_pane import render_side_by_side


class TwinPaneApp(App):
    BINDINGS = [("ctrl+q", "quit", "Quit")]
    DEFAULT_CSS = """
    App {
        background: $surface-darken-3;
    }

    Screen {
        background: $surface-darken-3;
        width: 100%;
        height: 100%;
    }
    """

    def __init__(self, session: SessionConfig | None = None, text_a: str = "", text_b: str = ""):
        """Initialize the TwinPane application.

        Args:
            session: Input files, forced mode and watch flag for this run
            text_a: Initial content of input A when no left file is given
            text_b: Initial content of input B when no right file is given
        """
        super().__init__()
        self.session = session or SessionConfig()
        self._text_a = text_a
        self._text_b = text_b

    def on_mount(self):
        """Push the compare screen to begin the application UI."""
        # Stdout now belongs to this app; re-check whether it is headless
        log.reset_headless_cache()
        self.push_screen(CompareScreen(self.session, self._text_a, self._text_b))


def _create_argument_parser():
    """Create and configure the command-line argument parser."""
    parser = argparse.ArgumentParser(description="TwinPane: side-by-side diff and text conversion tool")
    parser.add_argument('--left', type=str, help='File to load into input A (original)')
    parser.add_argument('--right', type=str, help='File to load into input B (modified)')
    parser.add_argument(
        '--mode',
        type=str,
        choices=mode_choices(),
        default=None,
        help='Force a mode instead of auto-detecting it',
    )
    parser.add_argument('--print', action='store_true', help='Render the result to stdout and exit')
    parser.add_argument('--no-watch', action='store_true', help='Do not reload input files when they change')
    return parser


def _validate_configuration(session: SessionConfig) -> SessionConfig:
    """Validate paths and mode; exit with a readable message on failure."""
    try:
        left, right = validate_session_paths(session.left_path, session.right_path)
        validate_mode(session.mode)
    except ValidationError as e:
        log.error(f"Configuration validation failed: {e}")
        sys.stderr.write(f"Configuration Error: {e}\n")
        sys.stderr.write("\nPlease check your arguments and try again.\n")
        sys.stderr.write("Use --help for usage information.\n")
        sys.exit(1)
    return SessionConfig(left_path=left, right_path=right, mode=session.mode, watch=session.watch)


def _read_input(path: str | None) -> str:
    if not path:
        return ""
    result = safe_read_file(path)
    if not result.success:
        sys.stderr.write(f"Error: {result.error_message}\n")
        sys.exit(1)
    return result.content


def print_comparison(session: SessionConfig, console: Console | None = None) -> int:
    """Render the session's inputs once, without the TUI.

    Returns:
        Process exit status: 1 when a conversion fails, otherwise 0
    """
    console = console or Console()
    text_a = _read_input(session.left_path)
    text_b = _read_input(session.right_path)
    mode = parse_mode(session.mode) or detect_mode(text_a, text_b)
    log.debug(f"[CLI] Printing in {mode.value} mode")

    if mode is Mode.DIFF:
        console.print(render_side_by_side(render_panes(text_a, text_b)))
        return 0

    result = run_conversion(mode, text_a)
    console.print(render_conversion(result))
    return 0 if result.ok else 1


def main(argv=None):
    """Main entry point for TwinPane."""
    parser = _create_argument_parser()
    args = parser.parse_args(argv)

    session = SessionConfig.from_args(args).merge_with_env()
    session = _validate_configuration(session)

    if args.print:
        return print_comparison(session)

    TwinPaneApp(session).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
