"""
Main Textual application class for the Roster Dashboard
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from textual.app import App
from textual.binding import Binding

from roster_dashboard.di import Container, build_container
from roster_dashboard.ui.screens.members_screen import MembersScreen
from simple_logger import Slogger


class RosterApp(App):
    """Terminal dashboard for team members and their parents."""

    TITLE = "Roster Dashboard"

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        config: Dict[str, Any],
        team_id: str,
        *,
        container: Optional[Container] = None,
    ) -> None:
        super().__init__()
        self.config = config
        self.team_id = team_id
        self.container: Container = container or build_container(config)

    def on_mount(self) -> None:
        Slogger.info("Roster dashboard mounted", {"team_id": self.team_id})
        self.push_screen(
            MembersScreen(
                self.container.roster_service,
                self.team_id,
                self.config,
            )
        )

    async def on_unmount(self) -> None:
        await self.container.aclose()
