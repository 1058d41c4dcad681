# roster_dashboard/services/graphql_client.py
"""
Async GraphQL transport over curl_cffi.

One POST per operation; failures are mapped onto the TransportError family so
callers only ever deal with the dashboard's own error types.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from curl_cffi import requests

from roster_dashboard.errors import (
    AuthenticationError,
    QueryError,
    ResponseFormatError,
    TransportError,
)
from simple_logger import Slogger

DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_IMPERSONATE_BROWSER = "chrome110"


class GraphQLClient:
    """Thin request/response wrapper around a GraphQL endpoint."""

    def __init__(
        self,
        endpoint: str,
        *,
        token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        impersonate: Optional[str] = DEFAULT_IMPERSONATE_BROWSER,
        session: Optional[requests.AsyncSession] = None,
    ) -> None:
        """
        Args:
            endpoint: Full URL of the GraphQL endpoint
            token: Bearer token sent with every request, if any
            timeout: Per-request timeout in seconds
            impersonate: curl_cffi browser profile, or None for plain curl
            session: Pre-built session (tests inject a mock here)
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self._token = token
        self._impersonate = impersonate
        self._session = session

    # ------------------------------------------------------------------ #
    # session
    # ------------------------------------------------------------------ #

    def _get_session(self) -> requests.AsyncSession:
        if self._session is None:
            kwargs: Dict[str, Any] = {"timeout": self.timeout}
            if self._impersonate:
                kwargs["impersonate"] = self._impersonate
            self._session = requests.AsyncSession(**kwargs)
        return self._session

    def _headers(self, extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        if extra:
            headers.update(extra)
        return headers

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None

    # ------------------------------------------------------------------ #
    # operations
    # ------------------------------------------------------------------ #

    async def execute(
        self,
        document: str,
        variables: Optional[Mapping[str, Any]] = None,
        *,
        headers: Optional[Mapping[str, str]] = None,
        operation_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Run a query or mutation and return its ``data`` object.

        Raises:
            AuthenticationError: 401/403 from the endpoint
            QueryError: the response carried GraphQL errors
            ResponseFormatError: the body was not a GraphQL JSON response
            TransportError: network failure, timeout or any other bad status
        """
        payload: Dict[str, Any] = {"query": document, "variables": dict(variables or {})}
        if operation_name:
            payload["operationName"] = operation_name

        context = {"endpoint": self.endpoint, "operation": operation_name or "anonymous"}
        Slogger.debug("GraphQL request", {**context, "variables": payload["variables"]})

        try:
            response = await self._get_session().post(
                self.endpoint,
                json=payload,
                headers=self._headers(headers),
                timeout=self.timeout,
            )
        except requests.RequestsError as e:
            Slogger.error(f"GraphQL request failed: {e}", context)
            raise TransportError(f"Request to {self.endpoint} failed: {e}") from e

        status = response.status_code
        if status in (401, 403):
            raise AuthenticationError(f"Not authorized (HTTP {status})", status_code=status)

        try:
            body = response.json()
        except ValueError as e:
            if status >= 400:
                raise TransportError(f"HTTP {status} from {self.endpoint}", status_code=status) from e
            raise ResponseFormatError(f"Response from {self.endpoint} is not JSON", status_code=status) from e

        if not isinstance(body, dict):
            raise ResponseFormatError("GraphQL response must be a JSON object", status_code=status)

        errors = body.get("errors")
        if errors:
            messages = [
                err.get("message", str(err)) if isinstance(err, dict) else str(err)
                for err in errors
            ]
            Slogger.warning("GraphQL errors in response", {**context, "errors": messages})
            raise QueryError(messages)

        if status >= 400:
            raise TransportError(f"HTTP {status} from {self.endpoint}", status_code=status)

        data = body.get("data")
        if not isinstance(data, dict):
            raise ResponseFormatError("GraphQL response has no data", status_code=status)
        return data
