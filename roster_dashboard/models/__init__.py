"""Roster dashboard data models."""

from roster_dashboard.models.pagination import (
    FetchOutcome,
    GridSnapshot,
    Node,
    PageInfo,
    RequestVariables,
    ResultSet,
    SortDirection,
    SortSpec,
)

__all__ = [
    "FetchOutcome",
    "GridSnapshot",
    "Node",
    "PageInfo",
    "RequestVariables",
    "ResultSet",
    "SortDirection",
    "SortSpec",
]
