# roster_dashboard/ui/messages.py
"""Messages the grid widgets post to their screen."""

from __future__ import annotations

from typing import Optional

from textual.message import Message

from roster_dashboard.models.pagination import Node, SortSpec


class SortChangeRequested(Message):
    """A sortable header was clicked; ``sort`` is the resulting sort (or None)."""

    def __init__(self, sort: Optional[SortSpec]) -> None:
        super().__init__()
        self.sort = sort


class PageChangeRequested(Message):
    """The pager asked for another page (zero-based)."""

    def __init__(self, index: int) -> None:
        super().__init__()
        self.index = index


class RowActivated(Message):
    """A row was selected with Enter or a click."""

    def __init__(self, node: Node) -> None:
        super().__init__()
        self.node = node
