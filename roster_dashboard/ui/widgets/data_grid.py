"""
Server-sorted, server-paginated grid widget
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Sequence

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widget import Widget
from textual.widgets import DataTable, Label, ProgressBar, Static

from roster_dashboard.grid.ordering import cycle_sort
from roster_dashboard.models.pagination import GridSnapshot, Node, SortDirection, SortSpec
from roster_dashboard.ui.columns import Column
from roster_dashboard.ui.messages import PageChangeRequested, RowActivated, SortChangeRequested
from roster_dashboard.ui.widgets.pagination import Pagination
from roster_dashboard.utils.formatters import error_message


class GridTable(DataTable):
    """
    DataTable with row cursor and a single forwarded activation message
    """

    class RowActivated(Message):
        """Row activated message"""
        def __init__(self, row_key: str) -> None:
            super().__init__()
            self.row_key = row_key

    def __init__(
        self,
        *,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.cursor_type = "row"
        self.zebra_stripes = True

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        event.stop()
        self.post_message(self.RowActivated(event.row_key.value))


class DataGridViewer(Vertical):
    """
    Title, progress bar, error line, rows and pager for one remote grid.

    The widget holds no paging state of its own: it renders GridSnapshots and
    turns clicks into SortChangeRequested / PageChangeRequested / RowActivated.
    """

    DEFAULT_CSS = """
    DataGridViewer {
        height: 1fr;
    }

    DataGridViewer > #grid-header {
        height: auto;
        min-height: 3;
    }

    DataGridViewer #grid-title {
        width: 1fr;
        content-align: left middle;
        height: 3;
        text-style: bold;
    }

    DataGridViewer > #grid-progress {
        width: 100%;
    }

    DataGridViewer > #grid-error {
        color: $error;
        padding: 0 1;
    }

    DataGridViewer > #grid-table {
        height: 1fr;
    }
    """

    def __init__(
        self,
        columns: Sequence[Column],
        *,
        title: str = "",
        actions: Iterable[Widget] = (),
        date_format: str = "%Y-%m-%d %H:%M",
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self._columns = {column.key: column for column in columns}
        self._title = title
        self._actions = list(actions)
        self._date_format = date_format
        self._row_nodes: Dict[str, Node] = {}
        self._snapshot = GridSnapshot()
        self._rendered_sort: Optional[SortSpec] = None

    # ------------------------------------------------------------------ #
    # Compose & mount
    # ------------------------------------------------------------------ #

    def compose(self) -> ComposeResult:
        with Horizontal(id="grid-header"):
            yield Label(self._title, id="grid-title")
            yield from self._actions
        yield ProgressBar(total=None, show_percentage=False, show_eta=False, id="grid-progress")
        yield Static("", id="grid-error", markup=False)
        yield GridTable(id="grid-table")
        yield Pagination(id="grid-pagination")

    def on_mount(self) -> None:
        self._add_columns(None)
        self.query_one("#grid-progress").display = False
        self.query_one("#grid-error").display = False
        self.query_one(Pagination).display = False

    # ------------------------------------------------------------------ #
    # public helpers
    # ------------------------------------------------------------------ #

    @property
    def snapshot(self) -> GridSnapshot:
        return self._snapshot

    @property
    def row_count(self) -> int:
        return self.query_one(GridTable).row_count

    def set_title(self, title: str) -> None:
        self._title = title
        self._update_title()

    def show_snapshot(self, snapshot: GridSnapshot) -> None:
        """Redraw everything from one controller snapshot."""
        self._snapshot = snapshot
        self._update_title()

        table = self.query_one(GridTable)
        if snapshot.sort != self._rendered_sort:
            table.clear(columns=True)
            self._add_columns(snapshot.sort)
        else:
            table.clear()

        self._row_nodes = {}
        for node in snapshot.rows:
            key = str(node["id"])
            self._row_nodes[key] = node
            table.add_row(
                *(Text(column.cell(node, self._date_format)) for column in self._columns.values()),
                key=key,
            )

        self.query_one("#grid-progress").display = snapshot.loading

        error_line = self.query_one("#grid-error", Static)
        if snapshot.error is not None:
            error_line.update(error_message(snapshot.error))
            error_line.display = True
        else:
            error_line.update("")
            error_line.display = False

        pagination = self.query_one(Pagination)
        page = snapshot.page
        if page is not None and page.count > 0:
            pagination.update_pages(page.index, page.count)
            pagination.display = True
        else:
            pagination.display = False

    # ------------------------------------------------------------------ #
    # Event handlers
    # ------------------------------------------------------------------ #

    def on_data_table_header_selected(self, event: DataTable.HeaderSelected) -> None:
        event.stop()
        column = self._columns.get(str(event.column_key.value))
        if column is None or not column.sortable:
            return
        self.post_message(SortChangeRequested(cycle_sort(self._snapshot.sort, column.field)))

    def on_grid_table_row_activated(self, event: GridTable.RowActivated) -> None:
        event.stop()
        node = self._row_nodes.get(str(event.row_key))
        if node is not None:
            self.post_message(RowActivated(node))

    def on_pagination_page_changed(self, event: Pagination.PageChanged) -> None:
        event.stop()
        self.post_message(PageChangeRequested(event.index))
        self.query_one(GridTable).scroll_home(animate=False)

    # ------------------------------------------------------------------ #
    # internals
    # ------------------------------------------------------------------ #

    def _update_title(self) -> None:
        text = Text(self._title, style="bold")
        page = self._snapshot.page
        if page is not None:
            text.append(f" ({page.total} in total)", style="dim")
        self.query_one("#grid-title", Label).update(text)

    def _add_columns(self, sort: Optional[SortSpec]) -> None:
        table = self.query_one(GridTable)
        for column in self._columns.values():
            label = column.label
            if sort is not None and sort.field_path == column.field:
                label += " ▲" if sort.direction is SortDirection.ASC else " ▼"
            table.add_column(label, key=column.key, width=column.width)
        self._rendered_sort = sort
