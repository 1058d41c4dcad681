"""Page-of-results containers and the request shape the grid sends."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from roster_dashboard.errors import ResponseFormatError

Node = Dict[str, Any]


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"

    @property
    def token(self) -> str:
        """Wire value expected by the API ("ASC" / "DESC")."""
        return self.value.upper()

    @classmethod
    def parse(cls, value: "SortDirection | str") -> "SortDirection":
        if isinstance(value, cls):
            return value
        return cls(str(value).lower())


@dataclass(frozen=True, slots=True)
class SortSpec:
    """The single active sort column."""

    field_path: str                 # dotted, e.g. "user.email"
    direction: SortDirection = SortDirection.ASC

    @classmethod
    def of(cls, field_path: str, direction: SortDirection | str = "asc") -> "SortSpec":
        return cls(field_path, SortDirection.parse(direction))


@dataclass(frozen=True, slots=True)
class PageInfo:
    """Server-reported page meta-data."""

    index: int      # current page index (0-based)
    count: int      # total number of pages
    total: int      # total records in the whole result set

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "PageInfo":
        try:
            return cls(
                index=int(payload["index"]),
                count=int(payload["count"]),
                total=int(payload.get("total") or 0),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ResponseFormatError(f"Malformed page object: {payload!r}") from e


@dataclass(frozen=True, slots=True)
class ResultSet:
    """One fetch's worth of rows plus the page it came from."""

    page: PageInfo
    nodes: Tuple[Node, ...] = ()

    @classmethod
    def from_payload(cls, payload: Any) -> "ResultSet":
        """Build from a `{page: {...}, nodes: [...]}` connection object."""
        if not isinstance(payload, Mapping):
            raise ResponseFormatError(f"Expected a connection object, got {type(payload).__name__}")

        page = payload.get("page")
        nodes = payload.get("nodes")
        if not isinstance(page, Mapping) or not isinstance(nodes, Sequence):
            raise ResponseFormatError("Connection object must have 'page' and 'nodes'")

        for node in nodes:
            if not isinstance(node, Mapping) or "id" not in node:
                raise ResponseFormatError("Every node needs an 'id'")

        return cls(page=PageInfo.from_payload(page), nodes=tuple(dict(n) for n in nodes))


@dataclass(frozen=True, slots=True)
class RequestVariables:
    """Variables derived from (page index, sort, committed search)."""

    page_index: int = 0
    sort: Optional[SortSpec] = None
    search: Optional[str] = None

    @property
    def order(self) -> Optional[Dict[str, Any]]:
        from roster_dashboard.grid.ordering import sort_to_order

        return sort_to_order(self.sort)

    def as_dict(self) -> Dict[str, Any]:
        variables: Dict[str, Any] = {"page": {"index": self.page_index}}
        if self.sort is not None:
            variables["order"] = self.order
        # None means "no filter"; "" is a real (if odd) filter value
        if self.search is not None:
            variables["search"] = self.search
        return variables


@dataclass(frozen=True, slots=True)
class FetchOutcome:
    """What a settled fetch produced: a ResultSet or an error."""

    data: Optional[ResultSet] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.data is not None


@dataclass(frozen=True, slots=True)
class GridSnapshot:
    """Everything the grid view needs for one render."""

    rows: Tuple[Node, ...] = ()
    page: Optional[PageInfo] = None
    loading: bool = False
    error: Optional[BaseException] = None
    sort: Optional[SortSpec] = None
    search: Optional[str] = None
