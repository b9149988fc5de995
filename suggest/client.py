"""
HTTP client for the course/professor suggestion service.

    GET {api_base}/api/courses/search?query=<encoded text>
        → [{"suggestion": str, "type": "course" | "professor"}, ...]

Any transport error, non-2xx status or malformed body is raised as
SuggestionServiceError; callers never see requests or pydantic exceptions.
No retries: a suggestion list is only useful for the keystroke that asked
for it.
"""

import asyncio
import logging

import requests
from pydantic import TypeAdapter, ValidationError

from suggest.config import API_BASE, REQUEST_TIMEOUT, SEARCH_PATH
from suggest.models import Suggestion, encode_component

log = logging.getLogger(__name__)

USER_AGENT = "Course-Search-Bar/1.0"

_SUGGESTIONS = TypeAdapter(list[Suggestion])


class SuggestionServiceError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def _new_session() -> requests.Session:
    session = requests.Session()
    session.headers["User-Agent"] = USER_AGENT
    session.headers["Accept"] = "application/json"
    return session


class SuggestionClient:
    def __init__(
        self,
        api_base: str = API_BASE,
        search_path: str = SEARCH_PATH,
        timeout: float = REQUEST_TIMEOUT,
        session: requests.Session | None = None,
    ):
        self.api_base    = api_base.rstrip("/")
        self.search_path = search_path
        self.timeout     = timeout
        self.session     = session or _new_session()

    def search_url(self, query: str) -> str:
        return f"{self.api_base}{self.search_path}?query={encode_component(query)}"

    def search(self, query: str) -> list[Suggestion]:
        """Blocking fetch of the ranked suggestions for an already-trimmed query."""
        url = self.search_url(query)
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise SuggestionServiceError(f"Request failed for {url}: {exc}") from exc

        if not resp.ok:
            raise SuggestionServiceError(
                f"API request failed: {resp.status_code}", status_code=resp.status_code
            )

        try:
            suggestions = _SUGGESTIONS.validate_python(resp.json())
        except (ValueError, ValidationError) as exc:
            raise SuggestionServiceError(f"Malformed suggestion payload: {exc}") from exc

        log.debug("query=%r  hits=%d", query, len(suggestions))
        return suggestions

    async def asearch(self, query: str) -> list[Suggestion]:
        """search() off the event loop, so the loop only suspends on network I/O."""
        return await asyncio.to_thread(self.search, query)

    def close(self) -> None:
        self.session.close()
