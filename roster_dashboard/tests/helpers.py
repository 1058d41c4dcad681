"""Shared fakes for the test-suite."""

from __future__ import annotations

import asyncio
import os
import tempfile
from typing import Callable, List, Optional

from roster_dashboard.models.pagination import FetchOutcome, PageInfo, RequestVariables, ResultSet
from simple_logger import Slogger


def quiet_logs() -> str:
    """Send Slogger output to a throwaway directory; returns the log path."""
    path = os.path.join(tempfile.mkdtemp(prefix="roster-tests-"), "roster.log")
    Slogger.configure(path=path, level="DEBUG")
    return path


def make_result(count: int = 5, rows: int = 3, index: int = 0, total: Optional[int] = None, prefix: str = "n") -> ResultSet:
    nodes = tuple({"id": f"{prefix}{i}", "name": f"Name {i}"} for i in range(rows))
    return ResultSet(page=PageInfo(index=index, count=count, total=rows if total is None else total), nodes=nodes)


async def settle(rounds: int = 5) -> None:
    """Let call_soon callbacks and freshly created tasks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


class FakeSource:
    """A remote source whose responses the test resolves by hand."""

    def __init__(self) -> None:
        self.calls: List[RequestVariables] = []
        self.futures: List[asyncio.Future] = []

    def refetch(self, variables: RequestVariables) -> asyncio.Future:
        future = asyncio.get_running_loop().create_future()
        self.calls.append(variables)
        self.futures.append(future)
        return future

    def resolve(self, position: int, outcome: FetchOutcome) -> None:
        self.futures[position].set_result(outcome)


class _ManualHandle:
    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """A clock that only moves when the test says so."""

    def __init__(self) -> None:
        self.now = 0.0
        self.handles: List[_ManualHandle] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> _ManualHandle:
        handle = _ManualHandle(self.now + delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def live(self) -> List[_ManualHandle]:
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def advance(self, seconds: float) -> None:
        self.now += seconds
        for handle in sorted(self.live, key=lambda h: h.due):
            if handle.due <= self.now and not handle.cancelled:
                handle.fired = True
                handle.callback()
