"""
Debounced search emitter.

Coalesces rapid edits of a search buffer and commits at most one value per
quiet period. The timer is the only scheduled resource: at most one is live
per emitter, and it is released either by firing or by ``cancel()``.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional, Protocol

from simple_logger import Slogger

DEFAULT_DELAY_SECONDS = 0.5


class TimerHandle(Protocol):
    def cancel(self) -> Any: ...


class Scheduler(Protocol):
    """Anything that can run a callback later and hand back a cancellable handle."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class DebouncedSearchEmitter:
    """Owns the raw search buffer and the single pending commit timer."""

    def __init__(
        self,
        on_commit: Callable[[Optional[str]], None],
        *,
        delay: float = DEFAULT_DELAY_SECONDS,
        scheduler: Optional[Scheduler] = None,
        on_searching: Optional[Callable[[bool], None]] = None,
    ) -> None:
        """
        Args:
            on_commit: Receives the committed term, or None for "no search"
            delay: Quiet period in seconds
            scheduler: Timer source; defaults to the running asyncio loop
            on_searching: Told whenever the searching indicator flips
        """
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self._on_commit = on_commit
        self._on_searching = on_searching
        self._delay = delay
        self._scheduler = scheduler
        self._buffer = ""
        self._pending: Optional[TimerHandle] = None
        self._searching = False

    # ------------------------------------------------------------------ #
    # public API
    # ------------------------------------------------------------------ #

    @property
    def buffer(self) -> str:
        return self._buffer

    @property
    def searching(self) -> bool:
        return self._searching

    @property
    def pending(self) -> bool:
        return self._pending is not None

    @property
    def delay(self) -> float:
        return self._delay

    def on_input(self, text: str) -> None:
        """Replace the buffer and restart the quiet period."""
        self._buffer = text
        self._release_timer()
        self._pending = self._get_scheduler().call_later(self._delay, self._fire)
        self._set_searching(True)

    def cancel(self) -> None:
        """Drop any pending commit. Safe to call at any time."""
        self._release_timer()
        self._set_searching(False)

    # ------------------------------------------------------------------ #
    # internals
    # ------------------------------------------------------------------ #

    def _get_scheduler(self) -> Scheduler:
        if self._scheduler is None:
            self._scheduler = asyncio.get_running_loop()
        return self._scheduler

    def _release_timer(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _fire(self) -> None:
        self._pending = None
        term = self._buffer if self._buffer else None
        self._set_searching(False)
        Slogger.debug("Search committed", {"search": term if term is not None else "<none>"})
        self._on_commit(term)

    def _set_searching(self, value: bool) -> None:
        if self._searching == value:
            return
        self._searching = value
        if self._on_searching is not None:
            self._on_searching(value)
