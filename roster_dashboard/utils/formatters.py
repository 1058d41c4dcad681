"""
Formatting utility functions
"""

from datetime import datetime
from typing import Any, Iterable, Mapping, Optional


ROLE_TITLES = {
    "ADMIN": "Administrator",
    "STAFF": "Staff",
    "COACH": "Coach",
    "MEMBER": "Member",
    "PARENT": "Parent",
}


def format_date(date_value: Any, format_str: str = "%Y-%m-%d %H:%M") -> str:
    """
    Format a date value as a string

    Args:
        date_value: Date value to format (ISO string, datetime, or other)
        format_str: Format string for strftime

    Returns:
        Formatted date string or empty string if missing
    """
    if not date_value:
        return ""

    if isinstance(date_value, str):
        try:
            dt = datetime.fromisoformat(date_value.replace("Z", "+00:00"))
            return dt.strftime(format_str)
        except ValueError:
            return date_value

    if isinstance(date_value, datetime):
        return date_value.strftime(format_str)

    return str(date_value)


def role_display_title(role: str) -> str:
    """Human title for a role enum value."""
    if not role:
        return ""
    return ROLE_TITLES.get(role, role.replace("_", " ").title())


def format_roles(roles: Iterable[Any]) -> str:
    titles = []
    for role in roles or []:
        value = role.get("role") if isinstance(role, Mapping) else role
        if value:
            titles.append(role_display_title(value))
    return ", ".join(titles)


def parent_relation(roles: Iterable[Any]) -> Optional[str]:
    """Relation carried by the PARENT role, if any."""
    for role in roles or []:
        if isinstance(role, Mapping) and role.get("role") == "PARENT":
            return role.get("relation")
    return None


def format_email(email: Optional[str], confirmed: bool) -> str:
    if not email:
        return ""
    mark = "✓" if confirmed else "·"
    return f"{mark} {email}"


def error_message(error: Any) -> str:
    """Text shown in the grid's error line."""
    if isinstance(error, BaseException):
        return str(error) or type(error).__name__
    return str(error)


def resolve_path(node: Mapping[str, Any], path: str) -> Any:
    """Read a dotted path out of a nested mapping; missing parts give None."""
    value: Any = node
    for part in path.split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(part)
    return value
