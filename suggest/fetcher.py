"""
Debounced, cancellable suggestion fetching.

Keystrokes arrive through on_input_changed(). A query fires only after the
input has been quiet for the debounce window, and only for a trimmed text
of at least min_query_length characters; shorter input clears the store
immediately without touching the network.

Every input change bumps a generation counter. A fetch remembers the
generation it was started for and its outcome (suggestions, failure,
loading flag) is applied only if that generation is still current when it
completes, so responses can never be applied out of keystroke order.
In-flight requests are not aborted; superseded results are dropped.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from suggest.client import SuggestionServiceError
from suggest.config import DEBOUNCE_MS, MIN_QUERY_LENGTH
from suggest.models import Suggestion
from suggest.store import SuggestionStore

log = logging.getLogger(__name__)

FetchFn = Callable[[str], Awaitable[list[Suggestion]]]


class FetchController:
    def __init__(
        self,
        store: SuggestionStore,
        fetch: FetchFn,
        debounce_seconds: float = DEBOUNCE_MS / 1000,
        min_query_length: int = MIN_QUERY_LENGTH,
    ):
        self.store            = store
        self.fetch            = fetch
        self.debounce_seconds = debounce_seconds
        self.min_query_length = min_query_length

        self._timer: asyncio.TimerHandle | None = None
        self._generation = 0
        self._tasks: set[asyncio.Task] = set()
        self._idle_callbacks: list[Callable[[], None]] = []
        self._closed = False

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending(self) -> bool:
        """True while a debounced query is scheduled but has not fired."""
        return self._timer is not None

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def on_input_changed(self, text: str) -> None:
        """Schedule a query for text, replacing any query not yet fired."""
        self._ensure_open()
        self._generation += 1
        self._cancel_timer()

        query = text.strip()
        if len(query) < self.min_query_length:
            self.store.clear()
            return

        # Any outstanding fetch now belongs to a superseded input
        self.store.set_loading(False)

        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.debounce_seconds, self._fire, query, self._generation)
        log.debug("Scheduled query %r in %.0f ms", query, self.debounce_seconds * 1000)

    def invalidate(self) -> None:
        """Drop the scheduled query and make every in-flight result stale."""
        self._generation += 1
        self._cancel_timer()
        self.store.set_loading(False)

    def close(self) -> None:
        """Teardown: nothing started before this call may touch the store."""
        if self._closed:
            return
        self._generation += 1
        self._cancel_timer()
        self._closed = True
        if self._tasks:
            log.debug("Closed with %d fetch(es) in flight; results will be ignored.", len(self._tasks))

    @property
    def busy(self) -> bool:
        """True while any fetch, current or stale, is still in flight."""
        return bool(self._tasks)

    def call_when_idle(self, callback: Callable[[], None]) -> None:
        """Run callback now, or once the last fetch in flight has finished."""
        if not self._tasks:
            callback()
            return
        self._idle_callbacks.append(callback)

    async def wait_idle(self) -> None:
        """Wait for every fetch already in flight to finish."""
        while self._tasks:
            await asyncio.wait(list(self._tasks))

    # ------------------------------------------------------------------
    # Fetch lifecycle
    # ------------------------------------------------------------------

    def _fire(self, query: str, generation: int) -> None:
        self._timer = None
        if not self._is_current(generation):
            return

        self.store.set_loading(True)
        task = asyncio.get_running_loop().create_task(self._run(query, generation))
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if self._tasks:
            return
        callbacks, self._idle_callbacks = self._idle_callbacks, []
        for callback in callbacks:
            callback()

    async def _run(self, query: str, generation: int) -> None:
        try:
            suggestions = await self.fetch(query)
        except SuggestionServiceError as exc:
            log.warning("Error fetching suggestions for %r: %s", query, exc)
            if self._is_current(generation):
                self.store.clear()
            return
        except Exception:
            log.exception("Unexpected error fetching suggestions for %r", query)
            if self._is_current(generation):
                self.store.clear()
            return

        if not self._is_current(generation):
            log.debug("Discarding stale suggestions for %r", query)
            return

        self.store.replace(suggestions)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("FetchController is closed")
