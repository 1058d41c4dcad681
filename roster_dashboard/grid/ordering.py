"""
Sort-column to ``order`` variable mapping.

The API takes the sort as a nested object mirroring the field path, so a grid
sorted by ``user.email`` descending sends ``{"user": {"email": "DESC"}}``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from roster_dashboard.models.pagination import SortDirection, SortSpec


def compose_from_key_value(key: str, value: Any) -> Dict[str, Any]:
    """
    Expand a dotted key into nested single-key dicts.

    Args:
        key: Dotted path, e.g. "a.b.c"
        value: Value placed at the innermost key

    Returns:
        {"a": {"b": {"c": value}}}
    """
    obj: Any = value
    for part in reversed(key.split(".")):
        obj = {part: obj}
    return obj


def sort_to_order(sort: Optional[SortSpec]) -> Optional[Dict[str, Any]]:
    """Build the ``order`` variable for a sort, or None when unsorted."""
    if sort is None:
        return None
    return compose_from_key_value(sort.field_path, sort.direction.token)


def order_for(field_path: str, direction: SortDirection | str) -> Dict[str, Any]:
    return compose_from_key_value(field_path, SortDirection.parse(direction).token)


def cycle_sort(current: Optional[SortSpec], field_path: str) -> Optional[SortSpec]:
    """
    Next sort after a header click on ``field_path``.

    Unsorted (or sorted on another column) -> ascending -> descending -> unsorted.
    Only one column is ever sorted; clicking a new one replaces the old one.
    """
    if current is None or current.field_path != field_path:
        return SortSpec(field_path, SortDirection.ASC)
    if current.direction is SortDirection.ASC:
        return SortSpec(field_path, SortDirection.DESC)
    return None
