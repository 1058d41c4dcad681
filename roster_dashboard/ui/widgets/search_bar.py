"""
Search bar widget with debounced commits
"""

from typing import Callable, Optional

from textual.containers import Container
from textual.message import Message
from textual.timer import Timer
from textual.widget import Widget
from textual.widgets import Button, Input, Label

from roster_dashboard.grid.search import DEFAULT_DELAY_SECONDS, DebouncedSearchEmitter


class _TimerHandle:
    def __init__(self, timer: Timer) -> None:
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()


class WidgetScheduler:
    """Schedules debounce timers on a widget so they die with it."""

    def __init__(self, widget: Widget) -> None:
        self._widget = widget

    def call_later(self, delay: float, callback: Callable[[], None]) -> _TimerHandle:
        return _TimerHandle(self._widget.set_timer(delay, callback))


class SearchBar(Container):
    """
    Quick-search input. Typing restarts a quiet period; when it runs out the
    term is committed (None when the box is empty).
    """

    DEFAULT_CSS = """
    SearchBar {
        layout: horizontal;
        height: 3;
        width: auto;
        max-width: 50;
    }

    SearchBar > #search-input {
        width: 36;
    }

    SearchBar > #search-status {
        width: 3;
        content-align: center middle;
        height: 3;
    }

    SearchBar > #search-clear {
        min-width: 5;
    }
    """

    class Committed(Message):
        """Search committed message"""
        def __init__(self, search: Optional[str]) -> None:
            super().__init__()
            self.search = search

    def __init__(
        self,
        *,
        delay: float = DEFAULT_DELAY_SECONDS,
        placeholder: str = "Quick search...",
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        """
        Initialize the SearchBar

        Args:
            delay: Quiet period in seconds before a term is committed
            placeholder: Input placeholder text
            id: Optional widget ID
            classes: Optional CSS classes
        """
        super().__init__(id=id, classes=classes)
        self._placeholder = placeholder
        self._emitter = DebouncedSearchEmitter(
            self._commit,
            delay=delay,
            scheduler=WidgetScheduler(self),
            on_searching=self._show_searching,
        )

    def compose(self):
        """Create child widgets"""
        yield Input(placeholder=self._placeholder, id="search-input")
        yield Label("", id="search-status")
        yield Button("✕", id="search-clear")

    def on_mount(self) -> None:
        self.query_one("#search-clear", Button).display = False

    def on_unmount(self) -> None:
        self._emitter.cancel()

    @property
    def buffer(self) -> str:
        return self._emitter.buffer

    @property
    def searching(self) -> bool:
        return self._emitter.searching

    def focus_input(self) -> None:
        """Focus the search input"""
        self.query_one("#search-input", Input).focus()

    def clear(self) -> None:
        # Setting the value posts Input.Changed, which goes through the debounce
        self.query_one("#search-input", Input).value = ""

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "search-input":
            return
        event.stop()
        self._emitter.on_input(event.value)
        self._refresh_clear_button()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "search-clear":
            event.stop()
            self.clear()

    # ------------------------------------------------------------------ #
    # emitter callbacks
    # ------------------------------------------------------------------ #

    def _commit(self, search: Optional[str]) -> None:
        self.post_message(self.Committed(search))

    def _show_searching(self, searching: bool) -> None:
        if self.is_mounted:
            self.query_one("#search-status", Label).update("⟳" if searching else "")
            self._refresh_clear_button()

    def _refresh_clear_button(self) -> None:
        self.query_one("#search-clear", Button).display = bool(self.buffer) and not self.searching
