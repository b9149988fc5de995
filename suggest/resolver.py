"""
Resolve a selected suggestion into a navigation target.

Course suggestions carry the subject, number and title, e.g.
    "CSE 3320 OPERATING SYSTEMS"
while the results page is keyed by subject + number only ("CSE 3320").
The first two whitespace-separated terms are used as the course id when
the second one is a four-digit number; anything else (professor names,
free text) is passed through unchanged.

Before navigating, the caller's resetState() hook runs unless the user
picked what is already on screen: re-selecting the course or professor
being displayed must not wipe the displayed results.

Public API:
    course_prefix(text)                  → first two terms
    canonical_identifier(text)           → "CSE 3320" or text unchanged
    is_same_course / is_same_professor   sameness against a DisplayContext
    should_reset_state(text, context)    → bool
    resolve_target(suggestion)           → NavigationTarget
    NavigationResolver(navigate).resolve(suggestion, context, reset_state)
"""

import logging
import re
from collections.abc import Callable

from suggest.models import (
    RESULTS_PATH,
    Category,
    DisplayContext,
    NavigationTarget,
    Suggestion,
)

log = logging.getLogger(__name__)

COURSE_NUMBER = re.compile(r"[0-9]{4}")


def course_prefix(text: str) -> str:
    """'CSE 3320 OPERATING SYSTEMS' → 'CSE 3320'."""
    return " ".join(text.split()[:2])


def canonical_identifier(text: str) -> str:
    """
    Course id for text when it starts with '<SUBJECT> <4 digits>'.

    Falls back to the full, unsliced text, never to the two-term prefix.
    """
    parts = course_prefix(text).split()
    if len(parts) >= 2 and COURSE_NUMBER.fullmatch(parts[1]):
        return f"{parts[0]} {parts[1]}"
    return text


def is_same_course(text: str, context: DisplayContext) -> bool:
    course = context.current_course_id
    return (
        context.current_route_type is Category.COURSE
        and bool(course)
        and text.startswith(course)
    )


def is_same_professor(text: str, context: DisplayContext) -> bool:
    professor = context.current_professor_name
    return (
        context.current_route_type is Category.PROFESSOR
        and bool(professor)
        and text == professor
    )


def should_reset_state(text: str, context: DisplayContext) -> bool:
    return not (is_same_course(text, context) or is_same_professor(text, context))


def resolve_target(suggestion: Suggestion) -> NavigationTarget:
    return NavigationTarget(
        category=suggestion.category,
        identifier=canonical_identifier(suggestion.text),
    )


class NavigationResolver:
    """Turns a selection into at most one resetState() call and one navigate(url)."""

    def __init__(self, navigate: Callable[[str], None], results_path: str = RESULTS_PATH):
        self.navigate     = navigate
        self.results_path = results_path

    def resolve(
        self,
        suggestion: Suggestion,
        context: DisplayContext,
        reset_state: Callable[[], None] | None = None,
    ) -> NavigationTarget:
        if should_reset_state(suggestion.text, context):
            if reset_state is not None:
                log.info("Resetting caller state before navigating to %r", suggestion.text)
                reset_state()
        else:
            log.info("%r is already displayed, keeping caller state", suggestion.text)

        target = resolve_target(suggestion)
        url = target.url(self.results_path)
        log.info("Navigating: %s", url)
        self.navigate(url)
        return target
