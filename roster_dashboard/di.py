# roster_dashboard/di.py
"""
Very small dependency-injection helper.
"""

from __future__ import annotations

from typing import Any, Dict

from roster_dashboard.services.graphql_client import GraphQLClient
from roster_dashboard.services.roster_service import RosterService


class Container:
    """Holds lazily-created singletons."""

    def __init__(self, config: Dict[str, Any]) -> None:
        self._cfg = config
        self._client: GraphQLClient | None = None
        self._roster_service: RosterService | None = None

    @property
    def config(self) -> Dict[str, Any]:
        return self._cfg

    # ---------- infra ----------
    @property
    def client(self) -> GraphQLClient:
        if self._client is None:
            api = self._cfg.get("api", {})
            self._client = GraphQLClient(
                api["endpoint"],
                token=api.get("token"),
                timeout=api.get("timeout", 30),
                impersonate=api.get("impersonate"),
            )
        return self._client

    # ---------- services ----------
    @property
    def roster_service(self) -> RosterService:
        if self._roster_service is None:
            self._roster_service = RosterService(self.client)
        return self._roster_service

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()


# convenience factory
def build_container(config: Dict[str, Any]) -> Container:
    """Create a container for the given config."""
    return Container(config)
