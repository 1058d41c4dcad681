# roster_dashboard/errors.py

from __future__ import annotations

from typing import List, Optional


class DashboardError(Exception):
    """Base class for all dashboard errors."""
    pass


class TransportError(DashboardError):
    """The remote call failed or timed out."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(TransportError):
    """The API rejected our credentials (401/403)."""
    pass


class QueryError(TransportError):
    """The server answered with a GraphQL ``errors`` array."""

    def __init__(self, messages: List[str]) -> None:
        super().__init__("; ".join(messages) or "Unknown query error")
        self.messages = list(messages)


class ResponseFormatError(TransportError):
    """The response body did not have the expected shape."""
    pass


class ConfigError(DashboardError):
    """Error related to configuration."""
    pass
