import copy
import unittest
from unittest.mock import AsyncMock, MagicMock

from textual.app import App
from textual.widgets import Input

from roster_dashboard.config import DEFAULT_CONFIG
from roster_dashboard.errors import TransportError
from roster_dashboard.models.pagination import FetchOutcome, GridSnapshot, PageInfo, SortDirection, SortSpec
from roster_dashboard.ui.columns import MEMBER_COLUMNS
from roster_dashboard.ui.messages import PageChangeRequested, RowActivated, SortChangeRequested
from roster_dashboard.ui.screens.members_screen import MembersScreen
from roster_dashboard.ui.screens.parents_screen import ParentsScreen
from roster_dashboard.ui.widgets.data_grid import DataGridViewer, GridTable
from roster_dashboard.ui.widgets.pagination import Pagination
from roster_dashboard.ui.widgets.search_bar import SearchBar
from roster_dashboard.tests.helpers import FakeSource, make_result, quiet_logs


class GridHarness(App):
    """Hosts a bare DataGridViewer and records what it posts."""

    def __init__(self) -> None:
        super().__init__()
        self.received = []

    def compose(self):
        yield DataGridViewer(
            MEMBER_COLUMNS,
            title="Members",
            actions=[SearchBar(delay=0.05, id="search-bar")],
            id="grid",
        )

    def on_sort_change_requested(self, event: SortChangeRequested) -> None:
        self.received.append(event)

    def on_page_change_requested(self, event: PageChangeRequested) -> None:
        self.received.append(event)

    def on_row_activated(self, event: RowActivated) -> None:
        self.received.append(event)

    def on_search_bar_committed(self, event: SearchBar.Committed) -> None:
        self.received.append(event)


def header_event(column_key: str) -> MagicMock:
    event = MagicMock()
    event.column_key.value = column_key
    return event


class TestPaginationTargets(unittest.TestCase):

    def test_buttons_stay_in_range(self):
        pagination = Pagination()
        pagination.index, pagination.count = 0, 5

        self.assertEqual(pagination.target_for("prev-page"), 0)
        self.assertEqual(pagination.target_for("next-page"), 1)
        self.assertEqual(pagination.target_for("last-page"), 4)

        pagination.index = 4
        self.assertEqual(pagination.target_for("next-page"), 4)
        self.assertEqual(pagination.target_for("first-page"), 0)
        self.assertEqual(pagination.target_for(None), 4)


class TestDataGridViewer(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        quiet_logs()

    async def test_renders_rows_and_pager(self):
        app = GridHarness()
        async with app.run_test() as pilot:
            viewer = app.query_one(DataGridViewer)
            viewer.show_snapshot(GridSnapshot(rows=make_result(rows=3).nodes, page=PageInfo(0, 5, 42)))
            await pilot.pause()

            self.assertEqual(viewer.row_count, 3)
            self.assertTrue(app.query_one(Pagination).display)
            self.assertEqual(app.query_one(Pagination).count, 5)
            self.assertFalse(app.query_one("#grid-error").display)
            self.assertFalse(app.query_one("#grid-progress").display)

    async def test_loading_and_error_keep_rows(self):
        app = GridHarness()
        async with app.run_test() as pilot:
            viewer = app.query_one(DataGridViewer)
            rows = make_result(rows=4).nodes
            viewer.show_snapshot(GridSnapshot(rows=rows, page=PageInfo(0, 1, 4), loading=True))
            await pilot.pause()
            self.assertTrue(app.query_one("#grid-progress").display)

            viewer.show_snapshot(GridSnapshot(rows=rows, page=PageInfo(0, 1, 4), error=TransportError("down")))
            await pilot.pause()

            self.assertEqual(viewer.row_count, 4)
            self.assertTrue(app.query_one("#grid-error").display)
            self.assertFalse(app.query_one("#grid-progress").display)

    async def test_pager_hidden_for_empty_result(self):
        app = GridHarness()
        async with app.run_test() as pilot:
            viewer = app.query_one(DataGridViewer)
            viewer.show_snapshot(GridSnapshot(page=PageInfo(0, 0, 0)))
            await pilot.pause()

            self.assertEqual(viewer.row_count, 0)
            self.assertFalse(app.query_one(Pagination).display)

    async def test_header_click_cycles_sort(self):
        app = GridHarness()
        async with app.run_test() as pilot:
            viewer = app.query_one(DataGridViewer)

            viewer.on_data_table_header_selected(header_event("name"))
            viewer.show_snapshot(GridSnapshot(sort=SortSpec.of("name", "asc")))
            viewer.on_data_table_header_selected(header_event("name"))
            viewer.show_snapshot(GridSnapshot(sort=SortSpec.of("name", "desc")))
            viewer.on_data_table_header_selected(header_event("name"))
            viewer.on_data_table_header_selected(header_event("roles"))
            await pilot.pause()

            sorts = [m.sort for m in app.received if isinstance(m, SortChangeRequested)]
            self.assertEqual(
                sorts,
                [SortSpec("name", SortDirection.ASC), SortSpec("name", SortDirection.DESC), None],
            )

    async def test_page_change_is_forwarded(self):
        app = GridHarness()
        async with app.run_test() as pilot:
            app.query_one(Pagination).post_message(Pagination.PageChanged(2))
            await pilot.pause()

            pages = [m.index for m in app.received if isinstance(m, PageChangeRequested)]
            self.assertEqual(pages, [2])

    async def test_row_activation_carries_node(self):
        app = GridHarness()
        async with app.run_test() as pilot:
            viewer = app.query_one(DataGridViewer)
            viewer.show_snapshot(GridSnapshot(rows=make_result(rows=2).nodes, page=PageInfo(0, 1, 2)))
            viewer.on_grid_table_row_activated(GridTable.RowActivated("n1"))
            viewer.on_grid_table_row_activated(GridTable.RowActivated("unknown"))
            await pilot.pause()

            nodes = [m.node for m in app.received if isinstance(m, RowActivated)]
            self.assertEqual(nodes, [{"id": "n1", "name": "Name 1"}])

    async def test_search_commits_after_quiet_period(self):
        app = GridHarness()
        async with app.run_test() as pilot:
            search_input = app.query_one("#search-input", Input)
            search_input.value = "a"
            search_input.value = "an"
            search_input.value = "ann"
            await pilot.pause(0.3)

            searches = [m.search for m in app.received if isinstance(m, SearchBar.Committed)]
            self.assertEqual(searches, ["ann"])
            self.assertFalse(app.query_one(SearchBar).searching)


class MembersHarness(App):

    def __init__(self, service) -> None:
        super().__init__()
        self.service = service

    def on_mount(self) -> None:
        self.push_screen(MembersScreen(self.service, "t1", copy.deepcopy(DEFAULT_CONFIG)))


class TestMembersScreen(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        quiet_logs()
        self.source = FakeSource()
        self.service = MagicMock()
        self.service.members_query.return_value = self.source
        self.service.team = AsyncMock(return_value={"id": "t1", "name": "Juniors"})

    async def test_loads_first_page_and_pages_forward(self):
        app = MembersHarness(self.service)
        async with app.run_test() as pilot:
            await pilot.pause()
            screen = app.screen
            self.assertIsInstance(screen, MembersScreen)
            self.service.members_query.assert_called_once_with("t1")
            self.assertEqual(len(self.source.calls), 1)

            self.source.resolve(0, FetchOutcome(data=make_result(count=5, rows=3)))
            await pilot.pause()
            self.assertEqual(screen.query_one(DataGridViewer).row_count, 3)
            self.assertEqual(screen.grid_title, 'Members of "Juniors"')

            screen.action_next_page()
            await pilot.pause()
            self.assertEqual(self.source.calls[-1].page_index, 1)


class ParentsHarness(App):

    def __init__(self, service) -> None:
        super().__init__()
        self.service = service

    def on_mount(self) -> None:
        self.push_screen(ParentsScreen(self.service, "m1", copy.deepcopy(DEFAULT_CONFIG)))


class TestParentsScreen(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        quiet_logs()
        self.source = FakeSource()
        self.service = MagicMock()
        self.service.parents_query.return_value = self.source
        self.service.member = AsyncMock(return_value={"id": "m1", "name": "Ann"})
        self.service.invite_parent = AsyncMock(
            return_value={"id": "p9", "name": "Pat", "email": "pat@example.test"}
        )

    async def loaded_screen(self, pilot) -> ParentsScreen:
        await pilot.pause()
        screen = pilot.app.screen
        self.source.resolve(0, FetchOutcome(data=make_result(count=1, rows=2)))
        await pilot.pause()
        return screen

    async def test_first_fetch_is_newest_first(self):
        app = ParentsHarness(self.service)
        async with app.run_test() as pilot:
            screen = await self.loaded_screen(pilot)

            self.assertIsInstance(screen, ParentsScreen)
            self.service.parents_query.assert_called_once_with("m1")
            self.assertEqual(self.source.calls[0].as_dict()["order"], {"createdAt": "DESC"})
            self.assertEqual(screen.grid_title, 'Parents of "Ann"')

    async def test_successful_invite_reloads_grid(self):
        app = ParentsHarness(self.service)
        async with app.run_test() as pilot:
            screen = await self.loaded_screen(pilot)

            sent = await screen.invite_parent(name="Pat", email="pat@example.test", relation="Father")
            await pilot.pause()

            self.assertTrue(sent)
            self.service.invite_parent.assert_awaited_once_with(
                "m1", name="Pat", email="pat@example.test", relation="Father"
            )
            self.assertEqual(len(self.source.calls), 2)
            self.assertEqual(self.source.calls[1], self.source.calls[0])

    async def test_failed_invite_does_not_reload(self):
        self.service.invite_parent.side_effect = TransportError("server unavailable")
        app = ParentsHarness(self.service)
        async with app.run_test() as pilot:
            screen = await self.loaded_screen(pilot)

            sent = await screen.invite_parent(name="Pat", email="pat@example.test", relation="Father")
            await pilot.pause()

            self.assertFalse(sent)
            self.assertEqual(len(self.source.calls), 1)
            self.assertFalse(screen.controller.loading)


if __name__ == "__main__":
    unittest.main()
