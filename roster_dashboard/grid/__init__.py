"""Remote-paginated grid: controller, debounced search and sort mapping."""

from roster_dashboard.grid.controller import GridController
from roster_dashboard.grid.ordering import compose_from_key_value, cycle_sort, order_for, sort_to_order
from roster_dashboard.grid.search import DebouncedSearchEmitter

__all__ = [
    "GridController",
    "DebouncedSearchEmitter",
    "compose_from_key_value",
    "cycle_sort",
    "order_for",
    "sort_to_order",
]
