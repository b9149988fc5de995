"""
Suggestion data model.

Wire format returned by GET /api/courses/search:
    [{"suggestion": "CSE 3320 OPERATING SYSTEMS", "type": "course"},
     {"suggestion": "Jane Smith",                 "type": "professor"}]

Public API:
    Category                       course | professor
    Suggestion(text, category)     one ranked entry, immutable
    SearchState                    snapshot held by SuggestionStore
    DisplayContext                 what the caller is currently showing
    NavigationTarget.url()         /results?course=… or /results?professor=…
"""

from enum import Enum
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

RESULTS_PATH = "/results"

# Characters encodeURIComponent leaves untouched
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_component(value: str) -> str:
    """Percent-encode a single query value: 'CSE 3320' → 'CSE%203320'."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


class Category(str, Enum):
    COURSE = "course"
    PROFESSOR = "professor"


class Suggestion(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = Field(alias="suggestion")
    category: Category = Field(alias="type")


class SearchState(BaseModel):
    """
    Everything a rendering layer needs to draw the search bar.

    Replaced wholesale on every change; listeners always receive a fresh
    snapshot and may keep it.
    """

    model_config = ConfigDict(frozen=True)

    raw_input: str = ""
    suggestions: tuple[Suggestion, ...] = ()
    loading: bool = False

    @property
    def visible_suggestions(self) -> tuple[Suggestion, ...]:
        """The dropdown is hidden while a fetch is outstanding."""
        if self.loading:
            return ()
        return self.suggestions

    @property
    def show_loading_placeholder(self) -> bool:
        return self.loading


class DisplayContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    current_course_id: str | None = None
    current_professor_name: str | None = None
    current_route_type: Category | None = None


class NavigationTarget(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: Category
    identifier: str

    def url(self, results_path: str = RESULTS_PATH) -> str:
        return f"{results_path}?{self.category.value}={encode_component(self.identifier)}"
