"""Search and filter views over notes, PYQs, and subjects.

Every function returns a fresh list derived from the collection it is
given; nothing is cached and the input is never modified. Text matching
is a case-insensitive substring test.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import StrEnum

from studyctl.domain.errors import InvalidFilterError
from studyctl.domain.lifecycle import PyqStatus
from studyctl.domain.models import Note, PyqItem, Subject


class PyqFilter(StrEnum):
    """Recognized PYQ status filter keys."""

    ALL = "all"
    NOT_DONE = "not-done"
    PRACTICED = "practiced"
    MASTERED = "mastered"


def parse_pyq_filter(key: str) -> PyqFilter:
    """Resolve a filter key; unrecognized keys are rejected.

    Raises:
        InvalidFilterError: *key* is not a :class:`PyqFilter` value.
    """
    try:
        return PyqFilter(key)
    except ValueError:
        raise InvalidFilterError(key) from None


def text_matches(query: str, *fields: str, tags: Iterable[str] = ()) -> bool:
    """Return True if *query* occurs in any field or tag, ignoring case.

    An empty query matches everything.
    """
    needle = query.casefold()
    if not needle:
        return True
    if any(needle in (value or "").casefold() for value in fields):
        return True
    return any(needle in tag.casefold() for tag in tags)


def search_notes(notes: Iterable[Note], query: str) -> list[Note]:
    """Notes whose title, content, or any tag contains *query*."""
    return [n for n in notes if text_matches(query, n.title, n.content, tags=n.tags)]


def search_pyqs(questions: Iterable[PyqItem], query: str) -> list[PyqItem]:
    """PYQ items whose question, year, module, or any tag contains *query*."""
    return [
        q for q in questions if text_matches(query, q.question, q.year, q.module, tags=q.tags)
    ]


def filter_pyqs(questions: Iterable[PyqItem], key: str | PyqFilter) -> list[PyqItem]:
    """PYQ items matching a status filter key."""
    selected = parse_pyq_filter(key)
    if selected == PyqFilter.ALL:
        return list(questions)
    if selected == PyqFilter.NOT_DONE:
        wanted = PyqStatus.NOT_STARTED
    else:
        wanted = PyqStatus(selected.value)
    return [q for q in questions if q.effective_status == wanted]


def search_subjects(subjects: Mapping[str, Subject], query: str) -> list[str]:
    """Subject codes whose code, name, or short name contains *query*."""
    return [
        code
        for code, subject in subjects.items()
        if text_matches(query, code, subject.name, subject.short_name)
    ]
