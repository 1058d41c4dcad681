# roster_dashboard/ui/screens/members_screen.py
"""
Members of one team
"""

from __future__ import annotations

from typing import Any, Dict

from roster_dashboard.errors import TransportError
from roster_dashboard.models.pagination import Node
from roster_dashboard.services.roster_service import RosterService
from roster_dashboard.ui.columns import MEMBER_COLUMNS
from roster_dashboard.ui.screens.grid_screen import GridScreen
from roster_dashboard.ui.screens.parents_screen import ParentsScreen
from simple_logger import Slogger


class MembersScreen(GridScreen):
    """Paginated members of a team; Enter opens the member's parents."""

    columns = MEMBER_COLUMNS
    noun = "Members"

    def __init__(
        self,
        roster_service: RosterService,
        team_id: str,
        config: Dict[str, Any],
        *,
        id: str = "members_screen",
    ) -> None:
        super().__init__(roster_service.members_query(team_id), config, id=id)
        self.roster_service = roster_service
        self.team_id = team_id

    def on_mount(self) -> None:
        super().on_mount()
        self.run_worker(self._load_team(), exclusive=True, group="title")

    async def _load_team(self) -> None:
        try:
            team = await self.roster_service.team(self.team_id)
        except TransportError as e:
            Slogger.exception(e, "Could not load team", {"screen": "MembersScreen", "team_id": self.team_id})
            self.notify(f"Could not load team: {e}", severity="warning", timeout=5)
            return
        self.set_grid_title(f'Members of "{team.get("name", self.team_id)}"')

    def open_node(self, node: Node) -> None:
        Slogger.info("Opening parents", {"screen": "MembersScreen", "member_id": node["id"]})
        self.app.push_screen(
            ParentsScreen(self.roster_service, str(node["id"]), self.config)
        )
