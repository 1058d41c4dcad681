"""Column definitions for the member and parent grids."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from roster_dashboard.models.pagination import Node
from roster_dashboard.utils.formatters import (
    format_date,
    format_email,
    format_roles,
    parent_relation,
    resolve_path,
)


@dataclass(frozen=True, slots=True)
class Column:
    key: str
    label: str
    field: str                      # dotted path, also the sort field
    width: Optional[int] = None
    sortable: bool = True
    kind: str = "text"              # "text" | "date"
    formatter: Optional[Callable[[Node], str]] = None

    def cell(self, node: Node, date_format: str = "%Y-%m-%d %H:%M") -> str:
        if self.formatter is not None:
            return self.formatter(node) or ""
        value = resolve_path(node, self.field)
        if self.kind == "date":
            return format_date(value, date_format)
        return "" if value is None else str(value)


def _email(node: Node) -> str:
    return format_email(node.get("email"), bool(node.get("emailConfirmed")))


MEMBER_COLUMNS: Tuple[Column, ...] = (
    Column("name", "Name", "name", width=25),
    Column("email", "E-mail", "email", width=32, formatter=_email),
    Column("roles", "Roles", "teamRoles", width=24, sortable=False,
           formatter=lambda node: format_roles(node.get("teamRoles"))),
    Column("createdAt", "Joined", "createdAt", width=18, kind="date"),
)

PARENT_COLUMNS: Tuple[Column, ...] = (
    Column("name", "Name", "name", width=25),
    Column("email", "E-mail", "email", width=32, formatter=_email),
    Column("relation", "Relation", "relation", width=16, sortable=False,
           formatter=lambda node: parent_relation(node.get("roles")) or ""),
    Column("createdAt", "Joined", "createdAt", width=18, kind="date"),
)
