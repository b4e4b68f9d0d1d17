"""Pydantic models for subjects, syllabus units, notes, PYQs, and attendance.

All models are frozen. Status fields keep the raw stored value (which may
be missing or unrecognized); readers go through the coercion helpers in
:mod:`studyctl.domain.lifecycle`, never through string comparisons.
"""

from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from studyctl.domain.lifecycle import (
    DayStatus,
    PyqStatus,
    TopicStatus,
    coerce_pyq_status,
    coerce_topic_status,
)
from studyctl.domain.tags import normalize_tags

_ENTITY_CONFIG = ConfigDict(
    frozen=True,
    populate_by_name=True,
    coerce_numbers_to_str=True,
)


def parse_marks(value: Any) -> int:
    """Parse a marks value; anything unparsable or negative becomes 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    try:
        marks = int(float(str(value).strip()))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(marks, 0)


class Subject(BaseModel):
    """A tracked subject. Read-only to the core once loaded."""

    model_config = _ENTITY_CONFIG

    code: str
    name: str
    short_name: str = Field(default="", alias="shortName")
    color: str | None = None
    credits: int = 0


class Topic(BaseModel):
    """Smallest trackable syllabus item."""

    model_config = _ENTITY_CONFIG

    id: str
    name: str = ""
    status: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def effective_status(self) -> TopicStatus:
        return coerce_topic_status(self.status)


class Unit(BaseModel):
    """A titled, ordered group of topics inside one subject's syllabus."""

    model_config = _ENTITY_CONFIG

    title: str = ""
    topics: tuple[Topic, ...] = ()


class Note(BaseModel):
    """A free-form study note.

    ``date`` is set once, when the note is added. A stored note without one
    stays undated rather than picking up the day it was loaded.
    """

    model_config = _ENTITY_CONFIG

    id: str
    title: str = ""
    content: str = ""
    tags: tuple[str, ...] = ()
    date: dt.date | None = None

    @field_validator("title", "content", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> Any:
        return normalize_tags(value)


class PyqItem(BaseModel):
    """A previous-year question with its practice status."""

    model_config = _ENTITY_CONFIG

    id: str
    question: str = ""
    year: str = ""
    marks: int = 0
    module: str = ""
    difficulty: str = "medium"
    tags: tuple[str, ...] = ()
    status: str | None = None

    @field_validator("marks", mode="before")
    @classmethod
    def _parse_marks(cls, value: Any) -> int:
        return parse_marks(value)

    @field_validator("question", "year", "module", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> Any:
        return normalize_tags(value)

    @property
    def effective_status(self) -> PyqStatus:
        return coerce_pyq_status(self.status)


class AttendanceEntry(BaseModel):
    """One marked day in an attendance history."""

    model_config = _ENTITY_CONFIG

    date: dt.date
    status: DayStatus


class AttendanceRecord(BaseModel):
    """Per-subject attendance counters with optional day-level history."""

    model_config = _ENTITY_CONFIG

    total: int = Field(default=0, ge=0)
    attended: int = Field(default=0, ge=0)
    history: tuple[AttendanceEntry, ...] = ()

    @model_validator(mode="after")
    def _attended_within_total(self) -> AttendanceRecord:
        if self.attended > self.total:
            msg = f"attended ({self.attended}) exceeds total ({self.total})"
            raise ValueError(msg)
        return self

    @classmethod
    def from_history(cls, history: tuple[AttendanceEntry, ...]) -> AttendanceRecord:
        """Recount totals from *history*; holidays are not classes."""
        total = sum(1 for e in history if e.status != DayStatus.HOLIDAY)
        attended = sum(1 for e in history if e.status == DayStatus.PRESENT)
        return cls(total=total, attended=attended, history=history)

    def status_on(self, day: dt.date) -> DayStatus | None:
        for entry in self.history:
            if entry.date == day:
                return entry.status
        return None
