"""
Pagination widget for navigating remote pages
"""

from typing import Optional

from textual.containers import Container
from textual.message import Message
from textual.widgets import Button, Label


class Pagination(Container):
    """
    Pagination widget with first, prev, next, last buttons.

    Works in zero-based page indexes; only the label shows one-based numbers.
    """

    DEFAULT_CSS = """
    Pagination {
        layout: horizontal;
        height: 3;
        align: center middle;
    }

    Pagination > Button {
        min-width: 5;
        margin: 0 1;
    }

    Pagination > #page-indicator {
        min-width: 15;
        content-align: center middle;
    }
    """

    class PageChanged(Message):
        """Page changed message"""
        def __init__(self, index: int) -> None:
            super().__init__()
            self.index = index

    def __init__(
        self,
        *,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.index = 0
        self.count = 0

    def compose(self):
        """Create child widgets"""
        yield Button("« First", id="first-page", classes="page-button")
        yield Button("< Prev", id="prev-page", classes="page-button")
        yield Label("", id="page-indicator", classes="page-indicator")
        yield Button("Next >", id="next-page", classes="page-button")
        yield Button("Last »", id="last-page", classes="page-button")

    def on_mount(self) -> None:
        self.update_pages(self.index, self.count)

    def update_pages(self, index: int, count: int) -> None:
        """
        Update pagination with new page information

        Args:
            index: Current page index (0-based)
            count: Total pages
        """
        self.index = index
        self.count = count

        self.query_one("#page-indicator", Label).update(
            f"Page [b]{index + 1}[/b] of [b]{count}[/b]"
        )

        first_btn = self.query_one("#first-page", Button)
        prev_btn = self.query_one("#prev-page", Button)
        next_btn = self.query_one("#next-page", Button)
        last_btn = self.query_one("#last-page", Button)

        first_btn.disabled = prev_btn.disabled = (index <= 0)
        next_btn.disabled = last_btn.disabled = (index >= count - 1)

    def target_for(self, button_id: Optional[str]) -> int:
        """Page a button leads to; only ever an index in [0, count)."""
        last = max(0, self.count - 1)
        if button_id == "first-page":
            return 0
        if button_id == "last-page":
            return last
        if button_id == "prev-page":
            return max(0, self.index - 1)
        if button_id == "next-page":
            return min(last, self.index + 1)
        return self.index

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle pagination button presses"""
        event.stop()
        new_index = self.target_for(event.button.id)
        if new_index != self.index:
            self.post_message(self.PageChanged(new_index))
