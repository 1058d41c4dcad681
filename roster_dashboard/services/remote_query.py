"""
A paginated GraphQL query bound to a document and its fixed variables.

``refetch`` never raises for transport problems: they come back in the
FetchOutcome so the grid can keep its rows and show the error.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from roster_dashboard.errors import ResponseFormatError, TransportError
from roster_dashboard.models.pagination import FetchOutcome, RequestVariables, ResultSet
from roster_dashboard.services.graphql_client import GraphQLClient


class RemoteQuery:
    """Request/response view of one list query (``members``, ``parents``...)."""

    def __init__(
        self,
        client: GraphQLClient,
        document: str,
        root_field: str,
        *,
        variables: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._client = client
        self.document = document
        self.root_field = root_field
        self.base_variables: Dict[str, Any] = dict(variables or {})
        self.headers: Dict[str, str] = dict(headers or {})

        # state of the most recent call; older calls that finish late leave it alone
        self.loading: bool = False
        self.error: Optional[BaseException] = None
        self.data: Optional[ResultSet] = None
        self._calls = 0

    def build_variables(self, variables: RequestVariables) -> Dict[str, Any]:
        return {**self.base_variables, **variables.as_dict()}

    async def refetch(self, variables: RequestVariables) -> FetchOutcome:
        self._calls += 1
        call = self._calls
        self.loading = True
        try:
            data = await self._client.execute(
                self.document,
                self.build_variables(variables),
                headers=self.headers or None,
            )
            if self.root_field not in data:
                raise ResponseFormatError(f"Response has no '{self.root_field}' field")
            result = ResultSet.from_payload(data[self.root_field])
        except TransportError as e:
            if call == self._calls:
                self.error = e
            return FetchOutcome(error=e)
        finally:
            if call == self._calls:
                self.loading = False

        if call == self._calls:
            self.data = result
            self.error = None
        return FetchOutcome(data=result)
