"""Debounced background search worker.

Queries typed in quick succession collapse to the most recent one: the
worker waits for input to settle for ``debounce_seconds`` before searching,
and a query superseded during that wait is never executed.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from queue import Empty, Queue

from .session import SearchSession
from .tree import SearchResult

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.5


@dataclass(frozen=True)
class SearchRequest:
    """One scheduled search."""

    request_id: int
    query: str
    submitted_at: float


@dataclass(frozen=True)
class SearchCompletion:
    """Finished search delivered back to the caller."""

    request: SearchRequest
    session: SearchSession


class SearchScheduler:
    """Single-threaded latest-request-wins debounced search scheduler."""

    def __init__(
        self,
        run_search: Callable[[str], SearchResult],
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._run_search = run_search
        self._debounce_seconds = max(0.0, debounce_seconds)
        self._clock = clock
        self._lock = threading.Lock()
        self._pending: SearchRequest | None = None
        self._running = False
        self._next_request_id = 1
        self._latest_request_id = 0
        self._results: Queue[SearchCompletion] = Queue()

    @property
    def latest_request_id(self) -> int:
        """Id of the newest scheduled request, ``0`` after a clear."""
        with self._lock:
            return self._latest_request_id

    def _wait_for_quiet_input(self) -> SearchRequest | None:
        while True:
            with self._lock:
                request = self._pending
                if request is None:
                    self._running = False
                    return None
                remaining = request.submitted_at + self._debounce_seconds - self._clock()
                if remaining <= 0:
                    self._pending = None
                    return request
            time.sleep(remaining)

    def _worker(self) -> None:
        while True:
            request = self._wait_for_quiet_input()
            if request is None:
                return
            try:
                result = self._run_search(request.query)
            except Exception:
                logger.exception("Search for %r failed", request.query)
                continue
            with self._lock:
                if request.request_id != self._latest_request_id:
                    continue
                self._results.put(
                    SearchCompletion(
                        request=request,
                        session=SearchSession.from_result(request.query, result),
                    )
                )

    def schedule(self, query: str) -> int | None:
        """Queue ``query``, replacing any pending one, and return its id.

        A blank query cancels pending work and returns ``None``; callers
        should leave search mode.
        """
        stripped = query.strip()
        with self._lock:
            if not stripped:
                self._pending = None
                self._latest_request_id = 0
                return None
            request_id = self._next_request_id
            self._next_request_id += 1
            self._latest_request_id = request_id
            self._pending = SearchRequest(
                request_id=request_id,
                query=stripped,
                submitted_at=self._clock(),
            )
            if self._running:
                return request_id
            self._running = True

        worker = threading.Thread(
            target=self._worker,
            name="filedeck-search",
            daemon=True,
        )
        worker.start()
        return request_id

    def drain_results(self) -> list[SearchCompletion]:
        """Drain all completed, still-current searches."""
        out: list[SearchCompletion] = []
        while True:
            try:
                out.append(self._results.get_nowait())
            except Empty:
                break
        return out


__all__ = [
    "DEFAULT_DEBOUNCE_SECONDS",
    "SearchCompletion",
    "SearchRequest",
    "SearchScheduler",
]
