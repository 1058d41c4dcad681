# roster_dashboard/ui/screens/parents_screen.py
"""
Parents/guardians of one member
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from textual.binding import Binding

from roster_dashboard.errors import TransportError
from roster_dashboard.models.pagination import SortDirection, SortSpec
from roster_dashboard.services.roster_service import RosterService
from roster_dashboard.ui.columns import PARENT_COLUMNS
from roster_dashboard.ui.screens.grid_screen import GridScreen
from simple_logger import Slogger


class ParentsScreen(GridScreen):
    """Paginated parents of a member, newest first."""

    BINDINGS = [
        *GridScreen.BINDINGS,
        Binding("escape", "app.pop_screen", "Back", show=True),
    ]

    columns = PARENT_COLUMNS
    noun = "Parents"
    initial_sort = SortSpec("createdAt", SortDirection.DESC)

    def __init__(
        self,
        roster_service: RosterService,
        member_id: str,
        config: Dict[str, Any],
        *,
        id: Optional[str] = None,
    ) -> None:
        super().__init__(roster_service.parents_query(member_id), config, id=id)
        self.roster_service = roster_service
        self.member_id = member_id

    def on_mount(self) -> None:
        super().on_mount()
        self.run_worker(self._load_member(), exclusive=True, group="title")

    async def _load_member(self) -> None:
        try:
            member = await self.roster_service.member(self.member_id)
        except TransportError as e:
            Slogger.exception(e, "Could not load member", {"screen": "ParentsScreen", "member_id": self.member_id})
            self.notify(f"Could not load member: {e}", severity="warning", timeout=5)
            return
        self.set_grid_title(f'Parents of "{member.get("name", self.member_id)}"')

    async def invite_parent(self, *, name: str, email: str, relation: str) -> bool:
        """Send the invite, then reload the grid so the new parent shows up."""
        try:
            await self.roster_service.invite_parent(
                self.member_id, name=name, email=email, relation=relation
            )
        except TransportError as e:
            Slogger.exception(e, "Error inviting parent", {"screen": "ParentsScreen", "member_id": self.member_id})
            self.notify(f"Error inviting parent: {e}", severity="error", timeout=5)
            return False

        self.notify(f"Invitation sent to {email}", severity="information", timeout=3)
        self.controller.retry()
        return True
