# roster_dashboard/ui/controllers/status_bar.py
"""Formats and updates the status bar."""

from __future__ import annotations

from textual.widgets import Static

from roster_dashboard.models.pagination import GridSnapshot
from roster_dashboard.utils.formatters import error_message


class StatusBarController:
    """Builds the human-readable status text and writes it to the bar."""

    def __init__(self, status_bar: Static, noun: str = "Records") -> None:
        self._bar = status_bar
        self._noun = noun

    # ------------------------------------------------------------------ #
    # public helpers
    # ------------------------------------------------------------------ #

    def update(self, snapshot: GridSnapshot) -> None:
        """Refresh the whole status line."""
        self._bar.update(self.describe(snapshot, self._noun))

    @staticmethod
    def describe(snapshot: GridSnapshot, noun: str = "Records") -> str:
        page = snapshot.page
        if page is None:
            parts = [f"{noun}: -", "Page: -"]
        else:
            parts = [
                f"{noun}: {page.total}",
                f"Page: {page.index + 1}/{max(page.count, 1)}",
            ]

        if snapshot.sort is not None:
            parts.append(f"Sort: {snapshot.sort.field_path} {snapshot.sort.direction.token}")
        if snapshot.search is not None:
            parts.append(f"Search: '{snapshot.search}'")
        if snapshot.loading:
            parts.append("Loading...")
        if snapshot.error is not None:
            parts.append(f"Error: {error_message(snapshot.error)}")

        return " | ".join(parts)
