# roster_dashboard/services/roster_service.py
"""
Business-logic layer for team members and their parents/guardians.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from roster_dashboard.errors import ResponseFormatError
from roster_dashboard.services.graphql_client import GraphQLClient
from roster_dashboard.services.remote_query import RemoteQuery
from simple_logger import Slogger

TEAM_HEADER = "X-Team-Id"

MEMBERS_QUERY = """
query members($page: PageInput, $order: MemberOrder, $search: String) {
  members(page: $page, order: $order, search: $search) {
    page { index count total }
    nodes {
      id
      name
      email
      emailConfirmed
      createdAt
      teamRoles { role }
    }
  }
}
"""

PARENTS_QUERY = """
query parents($childId: ID!, $page: PageInput, $order: UserOrder, $search: String) {
  parents(childId: $childId, page: $page, order: $order, search: $search) {
    page { index count total }
    nodes {
      id
      name
      email
      emailConfirmed
      createdAt
      roles {
        role
        ... on ParentRole { relation }
      }
    }
  }
}
"""

MEMBER_QUERY = """
query member($id: ID!) {
  member(id: $id) { id name email }
}
"""

TEAM_QUERY = """
query team($id: ID!) {
  team(id: $id) { id name }
}
"""

INVITE_PARENT_MUTATION = """
mutation inviteParent($childId: ID!, $name: String!, $email: String!, $relation: String!) {
  inviteParent(childId: $childId, name: $name, email: $email, relation: $relation) {
    id
    name
    email
  }
}
"""


class RosterService:
    """Handles all member/parent use-cases."""

    def __init__(self, client: GraphQLClient) -> None:
        self._client = client

    # --------------------------------------------------------------------- #
    # read side
    # --------------------------------------------------------------------- #

    def members_query(self, team_id: str) -> RemoteQuery:
        """Paginated members of a team (the team is picked by header)."""
        return RemoteQuery(
            self._client,
            MEMBERS_QUERY,
            "members",
            headers={TEAM_HEADER: team_id},
        )

    def parents_query(self, child_id: str) -> RemoteQuery:
        """Paginated parents/guardians of one member."""
        return RemoteQuery(
            self._client,
            PARENTS_QUERY,
            "parents",
            variables={"childId": child_id},
        )

    async def member(self, member_id: str) -> Dict[str, Any]:
        data = await self._client.execute(MEMBER_QUERY, {"id": member_id}, operation_name="member")
        return self._single(data, "member")

    async def team(self, team_id: str) -> Dict[str, Any]:
        data = await self._client.execute(TEAM_QUERY, {"id": team_id}, operation_name="team")
        return self._single(data, "team")

    # --------------------------------------------------------------------- #
    # write side
    # --------------------------------------------------------------------- #

    async def invite_parent(
        self,
        child_id: str,
        *,
        name: str,
        email: str,
        relation: str,
    ) -> Dict[str, Any]:
        """Invite a parent/guardian for a member and return the created parent."""
        context = {"child_id": child_id, "email": email, "relation": relation}
        Slogger.info("Inviting parent", context)

        data = await self._client.execute(
            INVITE_PARENT_MUTATION,
            {"childId": child_id, "name": name, "email": email, "relation": relation},
            operation_name="inviteParent",
        )
        parent = self._single(data, "inviteParent")

        Slogger.info("Parent invited", {**context, "parent_id": parent.get("id")})
        return parent

    # ------------------------------------------------------------------ #
    # helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _single(data: Dict[str, Any], field: str) -> Dict[str, Any]:
        value: Optional[Any] = data.get(field)
        if not isinstance(value, dict):
            raise ResponseFormatError(f"Response has no '{field}' object")
        return value
