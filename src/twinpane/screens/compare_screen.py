"""Two-input comparison screen.

Input A sits on the left and input B on the right. Below them a mode picker
chooses between a side-by-side diff of A against B and one of the
single-input conversions of A (JSON, Unix time, number bases, URL and
base64 coding). Output is recomputed from scratch, debounced, whenever
either input changes; with auto-detect on the mode follows the input.
"""

from __future__ import annotations

from typing import Callable, Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.timer import Timer
from textual.widgets import Select, Static, TextArea

from twinpane.utils.base_screen import BaseScreen
from twinpane.utils.config import SessionConfig, config
from twinpane.utils.converters import run_conversion
from twinpane.utils.detect import detect_mode
from twinpane.utils.error_handling import log_ui_error, log_watchdog_error
from twinpane.utils.io import safe_read_file
from twinpane.utils.logger import log
from twinpane.utils.modes import MODE_LABELS, Mode, parse_mode
from twinpane.utils.pane_builder import render_panes
from twinpane.utils.watchdog import watch_file
from twinpane.widgets.conversion_view import ConversionView
from twinpane.widgets.diff_pane import SideBySideView


class CompareScreen(BaseScreen):
    """Paste two texts, see them diffed side by side or converted."""

    BINDINGS = [
        Binding("ctrl+t", "toggle_auto_detect", "Auto-detect", priority=True),
        Binding("ctrl+s", "swap_inputs", "Swap A/B", priority=True),
        Binding("ctrl+l", "clear_inputs", "Clear", priority=True),
    ]

    DEFAULT_CSS = """
    #compare-root {
        width: 100%;
        height: 1fr;
    }
    #inputs {
        height: 2fr;
    }
    #inputs > .input-panel {
        width: 1fr;
        margin: 0 1;
    }
    .panel-title {
        height: 1;
        padding: 0 1;
    }
    .input-panel > TextArea {
        height: 1fr;
    }
    #tool-bar {
        height: 3;
        margin: 0 1;
    }
    #tool-bar > .tool-label {
        width: auto;
        padding: 1 1 0 0;
    }
    #mode-select {
        width: 32;
    }
    #tool-bar > #mode-status {
        width: 1fr;
        padding: 1 0 0 2;
    }
    #diff-view, #conversion-scroll {
        height: 3fr;
        margin: 0 1;
    }
    #conversion-scroll {
        border: round $panel-lighten-1;
    }
    """

    def __init__(
        self,
        session: Optional[SessionConfig] = None,
        text_a: str = "",
        text_b: str = "",
    ) -> None:
        super().__init__(page_name="Compare")
        self.session = session or SessionConfig()
        forced = parse_mode(self.session.mode)
        self.mode: Mode = forced or Mode.DIFF
        self.auto_detect = forced is None
        self._initial_a = text_a
        self._initial_b = text_b
        # Widgets, set in compose
        self._input_a: Optional[TextArea] = None
        self._input_b: Optional[TextArea] = None
        self._mode_select: Optional[Select] = None
        self._mode_status: Optional[Static] = None
        self._diff_view: Optional[SideBySideView] = None
        self._conversion_scroll: Optional[VerticalScroll] = None
        self._conversion_view: Optional[ConversionView] = None
        # Debounce timer for keystrokes
        self._refresh_timer: Optional[Timer] = None
        # Stop functions for file observers
        self._watch_stops: list[Callable[[], None]] = []

    def compose_main_content(self) -> ComposeResult:
        """Inputs on top, mode bar in the middle, output below."""
        with Vertical(id="compare-root"):
            with Horizontal(id="inputs"):
                with Vertical(classes="input-panel"):
                    yield Static("[b yellow]A[/b yellow] original", classes="panel-title", markup=True)
                    self._input_a = TextArea(self._initial_a, id="input-a")
                    yield self._input_a
                with Vertical(classes="input-panel"):
                    yield Static("[b green]B[/b green] modified", classes="panel-title", markup=True)
                    self._input_b = TextArea(self._initial_b, id="input-b")
                    yield self._input_b
            with Horizontal(id="tool-bar"):
                yield Static("Mode", classes="tool-label")
                self._mode_select = Select(
                    [(label, mode.value) for mode, label in MODE_LABELS.items()],
                    value=self.mode.value,
                    allow_blank=False,
                    id="mode-select",
                )
                yield self._mode_select
                self._mode_status = Static("", id="mode-status")
                yield self._mode_status
            self._diff_view = SideBySideView(id="diff-view")
            yield self._diff_view
            self._conversion_scroll = VerticalScroll(id="conversion-scroll")
            with self._conversion_scroll:
                self._conversion_view = ConversionView(id="conversion-view")
                yield self._conversion_view

    def get_footer_text(self) -> str:
        auto_state = "ON" if self.auto_detect else "OFF"
        return (
            f" Mode: [b]{MODE_LABELS[self.mode]}[/b]    "
            f"[orange1]Ctrl+T[/orange1] Auto-detect: {auto_state}    "
            "[orange1]Ctrl+S[/orange1] Swap    "
            "[orange1]Ctrl+L[/orange1] Clear    "
            "[orange1]Ctrl+Q[/orange1] Quit"
        )

    async def on_mount(self):
        """Load input files, start watching them, and render the first result."""
        await super().on_mount()
        self._load_session_files()
        if self.session.watch:
            self._start_file_observers()
        self.recompute()
        self.safe_set_focus(self._input_a)

    def on_unmount(self):
        self._stop_file_observers()

    # Inputs

    def _area_for_side(self, side: str) -> Optional[TextArea]:
        return self._input_a if side == "left" else self._input_b

    def _session_files(self) -> list[tuple[str, str]]:
        pairs = [("left", self.session.left_path), ("right", self.session.right_path)]
        return [(side, path) for side, path in pairs if path]

    def _load_session_files(self) -> None:
        for side, path in self._session_files():
            self._load_file_into(side, path)

    def _load_file_into(self, side: str, path: str) -> None:
        """Replace one input with a file's content; failures become a notification."""
        area = self._area_for_side(side)
        if area is None:
            return
        result = safe_read_file(path)
        if not result.success:
            self.notify(result.error_message, severity="error")
            return
        if result.content != area.text:
            area.load_text(result.content)

    def _start_file_observers(self) -> None:
        """Reload an input when its file changes on disk."""
        for side, path in self._session_files():
            try:
                _observer, stop = watch_file(
                    path,
                    self._make_reload_callback(side, path),
                    debounce_ms=config.watch_debounce_ms,
                )
                self._watch_stops.append(stop)
            except (OSError, RuntimeError) as e:
                log_watchdog_error(path, "starting observer", e)

    def _make_reload_callback(self, side: str, path: str) -> Callable[[], None]:
        def reload() -> None:
            # Runs on the watchdog thread
            self.app.call_from_thread(self._load_file_into, side, path)

        return reload

    def _stop_file_observers(self) -> None:
        for stop in self._watch_stops:
            stop()
        self._watch_stops = []

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        self.schedule_recompute()

    def on_select_changed(self, event: Select.Changed) -> None:
        """A mode picked by hand turns auto-detect off."""
        # Stale events (e.g. the initial value posted on mount) no longer match the widget
        if event.value is Select.BLANK or event.value != event.select.value:
            return
        try:
            picked = Mode(event.value)
        except ValueError:
            log.warning(f"[UI] Unknown mode selected: {event.value!r}")
            return
        if picked is self.mode:
            return
        self.mode = picked
        self.auto_detect = False
        self.update_footer()
        self.recompute()

    # Output

    def schedule_recompute(self) -> None:
        """Recompute after the user pauses typing for config.debounce_ms."""
        if self._refresh_timer is not None:
            self._refresh_timer.stop()
            self._refresh_timer = None
        if config.debounce_ms <= 0:
            self.recompute()
            return
        self._refresh_timer = self.set_timer(config.debounce_ms / 1000.0, self.recompute)

    def recompute(self) -> None:
        """Rebuild the output for the current inputs and mode."""
        self._refresh_timer = None
        if self._input_a is None or self._input_b is None:
            return
        text_a = self._input_a.text
        text_b = self._input_b.text

        if self.auto_detect:
            detected = detect_mode(text_a, text_b)
            if detected is not self.mode:
                log.debug(f"[UI] Auto-detected mode {detected.value}")
                self.mode = detected
                self._sync_mode_select()
                self.update_footer()

        if self.mode is Mode.DIFF:
            panes = render_panes(text_a, text_b)
            if self._diff_view is not None:
                self._diff_view.show(panes)
            self._set_status(f"{panes.left.line_count} ↔ {panes.right.line_count} lines")
        else:
            result = run_conversion(self.mode, text_a)
            if self._conversion_view is not None:
                self._conversion_view.show(result)
            self._set_status("" if result.ok else "[red]input not recognized[/red]")
        self._show_output_for_mode()

    def _sync_mode_select(self) -> None:
        if self._mode_select is None:
            return
        try:
            # Programmatic changes must not read as a manual pick
            with self.prevent(Select.Changed):
                self._mode_select.value = self.mode.value
        except (AttributeError, RuntimeError, ValueError) as e:
            log_ui_error("mode select", "syncing value", e)

    def _set_status(self, markup: str) -> None:
        if self._mode_status is None:
            return
        auto = "[dim](auto)[/dim] " if self.auto_detect else ""
        self._mode_status.update(f"{auto}{markup}")

    def _show_output_for_mode(self) -> None:
        diff_mode = self.mode is Mode.DIFF
        try:
            if self._diff_view is not None:
                self._diff_view.display = diff_mode
            if self._conversion_scroll is not None:
                self._conversion_scroll.display = not diff_mode
        except (AttributeError, RuntimeError) as e:
            log_ui_error("output area", "switching view", e)

    # Actions

    def action_toggle_auto_detect(self) -> None:
        self.auto_detect = not self.auto_detect
        self.update_footer()
        self.recompute()

    def action_swap_inputs(self) -> None:
        if self._input_a is None or self._input_b is None:
            return
        text_a, text_b = self._input_a.text, self._input_b.text
        self._input_a.load_text(text_b)
        self._input_b.load_text(text_a)
        self.schedule_recompute()

    def action_clear_inputs(self) -> None:
        for area in (self._input_a, self._input_b):
            if area is not None:
                area.load_text("")
        self.schedule_recompute()
