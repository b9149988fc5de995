"""
SearchBar: the input controller a host UI drives.

Props (mirroring what the embedding page passes in):
    initial_value  pre-fills the input; set_initial_value("") clears suggestions
    reset_state    optional hook, run before navigating to new content
    course         course id currently displayed, e.g. "CSE 3320"
    professor      professor name currently displayed
    route_type     "course" | "professor" | None

Events:
    on_input(text)   every keystroke, with the full input value
    on_key(key)      "Enter" picks the top suggestion; returns True if consumed
    on_trigger()     the search icon, same as Enter
    select(s)        a click on any rendered suggestion

Usage:
    async with SearchBar(navigate=router.push, course="CSE 3320",
                         route_type="course") as bar:
        bar.subscribe(render)
        bar.on_input("ope")

Leaving the block cancels the pending debounced query; fetches already in
flight finish but can no longer change the state. The HTTP session is
closed once the last of them has returned.
"""

from collections.abc import Callable

from suggest.client import SuggestionClient
from suggest.config import Settings
from suggest.fetcher import FetchController, FetchFn
from suggest.models import Category, DisplayContext, NavigationTarget, SearchState, Suggestion
from suggest.resolver import NavigationResolver
from suggest.store import Listener, SuggestionStore


ENTER = "Enter"


class SearchBar:
    def __init__(
        self,
        navigate: Callable[[str], None],
        *,
        initial_value: str = "",
        reset_state: Callable[[], None] | None = None,
        course: str | None = None,
        professor: str | None = None,
        route_type: Category | str | None = None,
        fetch: FetchFn | None = None,
        client: SuggestionClient | None = None,
        settings: Settings | None = None,
    ):
        settings = settings or Settings()

        self._client: SuggestionClient | None = None
        if fetch is None:
            self._client = client or SuggestionClient(
                api_base=settings.api_base,
                search_path=settings.search_path,
                timeout=settings.request_timeout,
            )
            fetch = self._client.asearch

        self.store    = SuggestionStore(raw_input=initial_value)
        self.fetcher  = FetchController(
            self.store,
            fetch,
            debounce_seconds=settings.debounce_seconds,
            min_query_length=settings.min_query_length,
        )
        self.resolver = NavigationResolver(navigate, results_path=settings.results_path)

        self.reset_state = reset_state
        self.context = DisplayContext(
            current_course_id=course,
            current_professor_name=professor,
            current_route_type=route_type,
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> SearchState:
        return self.store.state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self.store.subscribe(listener)

    # ------------------------------------------------------------------
    # Props
    # ------------------------------------------------------------------

    def set_initial_value(self, value: str) -> None:
        """The page changed initial_value (e.g. navigated to another result)."""
        self._ensure_open()
        self.store.set_raw_input(value)
        if not value:
            self.fetcher.invalidate()
            self.store.clear()

    def set_display_context(
        self,
        course: str | None = None,
        professor: str | None = None,
        route_type: Category | str | None = None,
    ) -> None:
        self.context = DisplayContext(
            current_course_id=course,
            current_professor_name=professor,
            current_route_type=route_type,
        )

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on_input(self, text: str) -> None:
        self._ensure_open()
        self.store.set_raw_input(text)
        self.fetcher.on_input_changed(text)

    def on_key(self, key: str) -> bool:
        if key != ENTER:
            return False
        return self.on_trigger() is not None

    def on_trigger(self) -> NavigationTarget | None:
        """Select the top-ranked suggestion, if there is one."""
        suggestions = self.state.suggestions
        if not suggestions:
            return None
        return self.select(suggestions[0])

    def select(self, suggestion: Suggestion) -> NavigationTarget:
        self._ensure_open()
        self.fetcher.invalidate()
        self.store.select(suggestion.text)
        return self.resolver.resolve(suggestion, self.context, self.reset_state)

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self.fetcher.closed

    def close(self) -> None:
        self.fetcher.close()
        if self._client is not None:
            # worker threads may still be using the session
            self.fetcher.call_when_idle(self._client.close)

    async def __aenter__(self) -> "SearchBar":
        return self

    async def __aexit__(self, *exc) -> None:
        self.close()

    def _ensure_open(self) -> None:
        if self.closed:
            raise RuntimeError("SearchBar is closed")
