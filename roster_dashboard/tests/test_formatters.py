import unittest
from datetime import datetime

from roster_dashboard.errors import TransportError
from roster_dashboard.models.pagination import GridSnapshot, PageInfo, SortSpec
from roster_dashboard.ui.columns import MEMBER_COLUMNS, PARENT_COLUMNS
from roster_dashboard.ui.controllers.status_bar import StatusBarController
from roster_dashboard.utils.formatters import (
    error_message,
    format_date,
    format_email,
    format_roles,
    parent_relation,
    resolve_path,
    role_display_title,
)


class TestFormatters(unittest.TestCase):

    def test_format_date(self):
        self.assertEqual(format_date("2024-03-05T14:30:00Z"), "2024-03-05 14:30")
        self.assertEqual(format_date(datetime(2024, 3, 5), "%d.%m.%Y"), "05.03.2024")
        self.assertEqual(format_date("yesterday"), "yesterday")
        self.assertEqual(format_date(None), "")

    def test_roles(self):
        self.assertEqual(role_display_title("COACH"), "Coach")
        self.assertEqual(role_display_title("TEAM_MANAGER"), "Team Manager")
        self.assertEqual(format_roles([{"role": "ADMIN"}, {"role": "MEMBER"}]), "Administrator, Member")
        self.assertEqual(format_roles(None), "")

    def test_parent_relation(self):
        roles = [{"role": "MEMBER"}, {"role": "PARENT", "relation": "Father"}]
        self.assertEqual(parent_relation(roles), "Father")
        self.assertIsNone(parent_relation([{"role": "MEMBER"}]))

    def test_format_email(self):
        self.assertEqual(format_email("a@b.test", True), "✓ a@b.test")
        self.assertEqual(format_email("a@b.test", False), "· a@b.test")
        self.assertEqual(format_email(None, True), "")

    def test_error_message(self):
        self.assertEqual(error_message(TransportError("timed out")), "timed out")
        self.assertEqual(error_message(RuntimeError()), "RuntimeError")

    def test_resolve_path(self):
        node = {"user": {"email": "a@b.test"}, "name": "Ann"}
        self.assertEqual(resolve_path(node, "user.email"), "a@b.test")
        self.assertEqual(resolve_path(node, "name"), "Ann")
        self.assertIsNone(resolve_path(node, "name.first"))
        self.assertIsNone(resolve_path(node, "missing.path"))


class TestColumns(unittest.TestCase):

    def test_member_cells(self):
        node = {
            "id": "m1",
            "name": "Ann",
            "email": "ann@example.test",
            "emailConfirmed": True,
            "createdAt": "2024-01-02T08:00:00Z",
            "teamRoles": [{"role": "COACH"}],
        }
        cells = [column.cell(node, "%Y-%m-%d") for column in MEMBER_COLUMNS]
        self.assertEqual(cells, ["Ann", "✓ ann@example.test", "Coach", "2024-01-02"])

    def test_parent_relation_cell_and_sortability(self):
        node = {"id": "p1", "name": "Pat", "roles": [{"role": "PARENT", "relation": "Mother"}]}
        by_key = {column.key: column for column in PARENT_COLUMNS}

        self.assertEqual(by_key["relation"].cell(node), "Mother")
        self.assertEqual(by_key["createdAt"].cell(node), "")
        self.assertFalse(by_key["relation"].sortable)
        self.assertTrue(by_key["name"].sortable)


class TestStatusBarText(unittest.TestCase):

    def test_before_first_result(self):
        text = StatusBarController.describe(GridSnapshot(loading=True), "Members")
        self.assertEqual(text, "Members: - | Page: - | Loading...")

    def test_full_status(self):
        snapshot = GridSnapshot(
            page=PageInfo(index=0, count=3, total=25),
            sort=SortSpec.of("createdAt", "desc"),
            search="ann",
            error=TransportError("timed out"),
        )
        self.assertEqual(
            StatusBarController.describe(snapshot, "Members"),
            "Members: 25 | Page: 1/3 | Sort: createdAt DESC | Search: 'ann' | Error: timed out",
        )

    def test_empty_result_shows_single_page(self):
        snapshot = GridSnapshot(page=PageInfo(index=0, count=0, total=0))
        self.assertEqual(StatusBarController.describe(snapshot, "Parents"), "Parents: 0 | Page: 1/1")


if __name__ == "__main__":
    unittest.main()
