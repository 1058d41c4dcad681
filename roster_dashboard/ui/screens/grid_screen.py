# roster_dashboard/ui/screens/grid_screen.py
"""
Shared screen for one remote grid: wires the GridController to the widgets.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from roster_dashboard.config import search_debounce_seconds
from roster_dashboard.grid.controller import GridController, RemoteSource
from roster_dashboard.models.pagination import GridSnapshot, Node, SortSpec
from roster_dashboard.ui.columns import Column
from roster_dashboard.ui.controllers.status_bar import StatusBarController
from roster_dashboard.ui.messages import PageChangeRequested, RowActivated, SortChangeRequested
from roster_dashboard.ui.widgets.data_grid import DataGridViewer
from roster_dashboard.ui.widgets.search_bar import SearchBar
from simple_logger import Slogger


class GridScreen(Screen):
    """Base screen: one DataGridViewer, a SearchBar and a status line."""

    BINDINGS = [
        Binding("f", "focus_search", "Search", show=True),
        Binding("r", "retry", "Reload", show=True),
        Binding("[", "prev_page", "Prev Page", show=True),
        Binding("]", "next_page", "Next Page", show=True),
    ]

    columns: Sequence[Column] = ()
    noun: str = "Records"
    initial_sort: Optional[SortSpec] = None

    # ------------------------------------------------------------------ #

    def __init__(
        self,
        query: RemoteSource,
        config: Dict[str, Any],
        *,
        grid_title: str = "",
        id: Optional[str] = None,
    ) -> None:
        super().__init__(id=id)
        self.config = config
        self.grid_title = grid_title or self.noun
        self.controller = GridController(
            query,
            initial_sort=self.initial_sort,
            name=id or type(self).__name__,
        )

    # ------------------------------------------------------------------ #
    # Compose & mount
    # ------------------------------------------------------------------ #

    def compose(self) -> ComposeResult:
        yield Header()
        yield DataGridViewer(
            self.columns,
            title=self.grid_title,
            actions=[SearchBar(delay=search_debounce_seconds(self.config), id="search-bar")],
            date_format=self.config.get("ui", {}).get("date_format", "%Y-%m-%d %H:%M"),
            id="grid",
        )
        yield Static(id="status-bar", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        self.status_controller = StatusBarController(self.query_one("#status-bar", Static), self.noun)
        self.controller.subscribe(self._show_snapshot)
        self._show_snapshot(self.controller.snapshot())
        self.controller.start()

    def on_unmount(self) -> None:
        self.controller.unsubscribe(self._show_snapshot)
        self.controller.close()

    def _show_snapshot(self, snapshot: GridSnapshot) -> None:
        self.query_one(DataGridViewer).show_snapshot(snapshot)
        self.status_controller.update(snapshot)

    def set_grid_title(self, title: str) -> None:
        self.grid_title = title
        self.query_one(DataGridViewer).set_title(title)

    # ------------------------------------------------------------------ #
    # Event handlers
    # ------------------------------------------------------------------ #

    def on_sort_change_requested(self, event: SortChangeRequested) -> None:
        self.controller.on_sort_change(event.sort)

    def on_page_change_requested(self, event: PageChangeRequested) -> None:
        self.controller.on_page_change(event.index)

    def on_search_bar_committed(self, event: SearchBar.Committed) -> None:
        self.controller.on_search_committed(event.search)

    def on_row_activated(self, event: RowActivated) -> None:
        self.open_node(event.node)

    def open_node(self, node: Node) -> None:
        """Row activation hook; screens with a detail view override this."""
        Slogger.debug("Row activated", {"screen": type(self).__name__, "id": node.get("id")})

    # ------------------------------------------------------------------ #
    # Action handlers
    # ------------------------------------------------------------------ #

    def action_focus_search(self) -> None:
        self.query_one(SearchBar).focus_input()

    def action_retry(self) -> None:
        self.controller.retry()

    def action_next_page(self) -> None:
        if self.controller.last_result is not None:
            self.controller.on_page_change(self.controller.index + 1)

    def action_prev_page(self) -> None:
        if self.controller.index > 0:
            self.controller.on_page_change(self.controller.index - 1)
