# roster_dashboard/grid/controller.py
"""
Remote-paginated grid controller.

Keeps the page index, the single sort column and the committed search term
consistent with a remote query. Every setter schedules one recompute-and-
dispatch step on the event loop, so a sort change that also resets the index
produces a single request. Each request carries a sequence number; only the
completion of the most recently dispatched request is applied.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, List, Optional, Protocol, Set

from roster_dashboard.models.pagination import (
    FetchOutcome,
    GridSnapshot,
    RequestVariables,
    ResultSet,
    SortSpec,
)
from simple_logger import Slogger

Listener = Callable[[GridSnapshot], None]


class RemoteSource(Protocol):
    """The only thing the controller needs from the transport."""

    def refetch(self, variables: RequestVariables) -> Awaitable[FetchOutcome]: ...


class GridController:
    """Owns index / sort / search state and the last-known-good ResultSet."""

    def __init__(
        self,
        query: RemoteSource,
        *,
        initial_sort: Optional[SortSpec] = None,
        name: str = "grid",
    ) -> None:
        self._query = query
        self._name = name

        self.index: int = 0
        self.sort: Optional[SortSpec] = None
        self.search: Optional[str] = None

        self.last_result: Optional[ResultSet] = None
        self.loading: bool = False
        self.error: Optional[BaseException] = None

        self._sequence = 0
        self._last_dispatched: Optional[RequestVariables] = None
        self._flush_handle: Optional[asyncio.Handle] = None
        self._force_next = False
        self._tasks: Set[asyncio.Task] = set()
        self._listeners: List[Listener] = []
        self._closed = False

        self.initialize(initial_sort)

    # ------------------------------------------------------------------ #
    # lifecycle
    # ------------------------------------------------------------------ #

    def initialize(self, initial_sort: Optional[SortSpec] = None) -> None:
        """Set the starting sort. Does not fetch; see start()."""
        self.sort = initial_sort

    def start(self) -> None:
        """Mount-equivalent: schedule the first fetch."""
        self._closed = False
        self._invalidate()

    def close(self) -> None:
        """Tear down: drop the pending dispatch and cancel in-flight fetches."""
        self._closed = True
        if self._flush_handle is not None:
            self._flush_handle.cancel()
            self._flush_handle = None
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()
        self._last_dispatched = None
        self._force_next = False
        self.loading = False

    # ------------------------------------------------------------------ #
    # listeners
    # ------------------------------------------------------------------ #

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> bool:
        if listener in self._listeners:
            self._listeners.remove(listener)
            return True
        return False

    def _publish(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                # A broken view must not stop the others from updating
                Slogger.exception(e, "Grid listener failed", {"grid": self._name})

    # ------------------------------------------------------------------ #
    # user events
    # ------------------------------------------------------------------ #

    def on_sort_change(self, new_sort: Optional[SortSpec]) -> bool:
        """Replace the sort and go back to the first page."""
        if new_sort == self.sort:
            return False
        self._invalidate()
        self.sort = new_sort
        self.index = 0
        self._publish()
        return True

    def on_page_change(self, new_index: int) -> bool:
        """
        Move to another page.

        Returns False (and changes nothing) when the index is outside the
        pages reported by the last successful fetch.
        """
        if not self.is_valid_index(new_index):
            Slogger.warning(
                "Rejected out-of-range page change",
                {
                    "grid": self._name,
                    "requested": new_index,
                    "count": self.last_result.page.count if self.last_result else "n/a",
                },
            )
            return False
        if new_index == self.index:
            if self.error is not None:
                # the request for this page failed; asking again resends it
                self.retry()
            return True
        self._invalidate()
        self.index = new_index
        self._publish()
        return True

    def on_search_committed(self, term: Optional[str]) -> None:
        """Store the committed search. The page index is kept as is."""
        if term == self.search:
            return
        self._invalidate()
        self.search = term
        self._publish()

    def retry(self) -> None:
        """Send the current variables again, even if they did not change."""
        self._invalidate()
        self._force_next = True

    def is_valid_index(self, index: int) -> bool:
        if index < 0:
            return False
        if self.last_result is None:
            return True
        return index < self.last_result.page.count

    # ------------------------------------------------------------------ #
    # derived state
    # ------------------------------------------------------------------ #

    def to_request_variables(self) -> RequestVariables:
        return RequestVariables(page_index=self.index, sort=self.sort, search=self.search)

    def snapshot(self) -> GridSnapshot:
        result = self.last_result
        return GridSnapshot(
            rows=result.nodes if result is not None else (),
            page=result.page if result is not None else None,
            loading=self.loading,
            error=self.error,
            sort=self.sort,
            search=self.search,
        )

    @property
    def rows(self):
        return self.last_result.nodes if self.last_result is not None else ()

    @property
    def sequence(self) -> int:
        """Number of the most recently dispatched request."""
        return self._sequence

    # ------------------------------------------------------------------ #
    # dispatch
    # ------------------------------------------------------------------ #

    def _invalidate(self) -> None:
        # Needs the running loop. Setters call this before touching state so a
        # failure here leaves the controller unchanged.
        if self._closed or self._flush_handle is not None:
            return
        loop = asyncio.get_running_loop()
        self._flush_handle = loop.call_soon(self._flush)

    def _flush(self) -> None:
        self._flush_handle = None
        if self._closed:
            return

        variables = self.to_request_variables()
        force, self._force_next = self._force_next, False
        if not force and variables == self._last_dispatched:
            return

        self._sequence += 1
        sequence = self._sequence
        self._last_dispatched = variables
        self.loading = True

        Slogger.debug(
            "Dispatching grid fetch",
            {"grid": self._name, "sequence": sequence, "variables": variables.as_dict()},
        )

        task = asyncio.ensure_future(self._fetch(sequence, variables))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._publish()

    async def _fetch(self, sequence: int, variables: RequestVariables) -> None:
        try:
            outcome = await self._query.refetch(variables)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            # Sources report failures in the outcome; keep "loading" from sticking
            Slogger.exception(e, "Grid source raised instead of returning an outcome", {"grid": self._name})
            outcome = FetchOutcome(error=e)
        self.reconcile(outcome, sequence)

    def reconcile(self, outcome: FetchOutcome, sequence: Optional[int] = None) -> bool:
        """
        Apply a settled fetch.

        Completions from superseded requests are ignored. On success the
        ResultSet is replaced; on failure the previous rows stay and the
        error is exposed.
        """
        if sequence is not None and sequence != self._sequence:
            Slogger.debug(
                "Discarding stale grid response",
                {"grid": self._name, "sequence": sequence, "latest": self._sequence},
            )
            return False

        self.loading = False
        if outcome.error is not None:
            self.error = outcome.error
            Slogger.error(
                f"Grid fetch failed: {type(outcome.error).__name__} - {outcome.error}",
                {"grid": self._name, "sequence": sequence},
            )
        elif outcome.data is not None:
            self.last_result = outcome.data
            self.error = None
            Slogger.info(
                f"Grid fetched {len(outcome.data.nodes)} rows",
                {
                    "grid": self._name,
                    "sequence": sequence,
                    "page": outcome.data.page.index,
                    "count": outcome.data.page.count,
                    "total": outcome.data.page.total,
                },
            )

        self._publish()
        return True

    def __repr__(self) -> str:
        return f"<GridController {self._name} index={self.index} sort={self.sort} search={self.search!r}>"
