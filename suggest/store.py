"""
Suggestion store: the single mutable SearchState behind a search bar.

Writers are the fetch controller (loading / replace / fail) and the
selection handler (select). Rendering layers subscribe and receive a new
SearchState snapshot after every change that actually changed something.
"""

from collections.abc import Callable, Iterable

from suggest.models import SearchState, Suggestion

Listener = Callable[[SearchState], None]


class SuggestionStore:
    def __init__(self, raw_input: str = ""):
        self._state = SearchState(raw_input=raw_input)
        self._listeners: list[Listener] = []

    @property
    def state(self) -> SearchState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def set_raw_input(self, text: str) -> None:
        self._commit(raw_input=text)

    def set_loading(self, loading: bool) -> None:
        self._commit(loading=loading)

    def replace(self, suggestions: Iterable[Suggestion]) -> None:
        """Swap in a completed fetch's list in one step."""
        self._commit(suggestions=tuple(suggestions), loading=False)

    def clear(self) -> None:
        self._commit(suggestions=(), loading=False)

    def select(self, text: str) -> None:
        """Selection: the input shows the chosen text and the dropdown closes."""
        self._commit(raw_input=text, suggestions=(), loading=False)

    def _commit(self, **changes) -> None:
        state = self._state.model_copy(update=changes)
        if state == self._state:
            return
        self._state = state
        for listener in list(self._listeners):
            listener(state)
