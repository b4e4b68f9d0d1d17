"""StateTree and the section updater.

The tree is the single source of truth for all subjects' data. It is
never mutated in place: :func:`update_section` returns a new tree that
shares every untouched section by reference, so callers can detect
change with an identity check.

The edit helpers below build a new section value by copying only the
path from the section root to the changed leaf (subject -> unit -> topic,
or subject -> item). Sibling subjects, units, and items keep their
identity.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Callable, Mapping, Sequence
from enum import StrEnum
from typing import Any, Protocol

from pydantic import BaseModel, Field

from studyctl.domain.errors import EntityNotFoundError, InvalidSectionError
from studyctl.domain.lifecycle import (
    DayStatus,
    PyqStatus,
    TopicStatus,
    advance_day_status,
    advance_pyq_status,
    advance_syllabus_status,
)
from studyctl.domain.models import (
    AttendanceEntry,
    AttendanceRecord,
    Note,
    PyqItem,
    Subject,
    Unit,
)


class Section(StrEnum):
    """Top-level slices of the state tree."""

    SUBJECTS = "subjects"
    NOTES = "notes"
    SYLLABUS = "syllabus"
    PYQ = "pyq"
    ATTENDANCE = "attendance"


class StateTree(BaseModel):
    """Root aggregate: section name -> subject code -> that subject's data.

    Unknown top-level keys in loaded data are ignored.
    """

    model_config = {"frozen": True}

    subjects: dict[str, Subject] = Field(default_factory=dict)
    notes: dict[str, tuple[Note, ...]] = Field(default_factory=dict)
    syllabus: dict[str, dict[str, Unit]] = Field(default_factory=dict)
    pyq: dict[str, tuple[PyqItem, ...]] = Field(default_factory=dict)
    attendance: dict[str, AttendanceRecord] = Field(default_factory=dict)

    def section(self, name: str) -> Mapping[str, Any]:
        """Return the value of section *name*."""
        return getattr(self, _section_key(name))


def _section_key(name: str) -> str:
    try:
        return Section(name).value
    except ValueError:
        raise InvalidSectionError(name) from None


def update_section(tree: StateTree, section_name: str, value: Mapping[str, Any]) -> StateTree:
    """Return a new tree with *section_name* replaced wholesale by *value*.

    No validation of *value* is performed. The returned tree holds *value*
    itself (not a copy) and every other section by reference.

    Raises:
        InvalidSectionError: *section_name* is not one of :class:`Section`.
    """
    key = _section_key(section_name)
    return tree.model_copy(update={key: value})


# ---------------------------------------------------------------------------
# Subject-scoped edits
# ---------------------------------------------------------------------------


class _HasId(Protocol):
    @property
    def id(self) -> str: ...


def replace_subject_entry[T](section: Mapping[str, T], code: str, entry: T) -> dict[str, T]:
    """Copy the section mapping with *code* set to *entry*.

    Existing subjects keep their position; a new code is appended.
    """
    updated = dict(section)
    updated[code] = entry
    return updated


def append_item[I](
    section: Mapping[str, Sequence[I]], code: str, item: I
) -> dict[str, tuple[I, ...]]:
    """Append *item* to the collection of subject *code*."""
    existing = tuple(section.get(code, ()))
    return replace_subject_entry(section, code, (*existing, item))  # type: ignore[arg-type]


def remove_item[I: _HasId](
    section: Mapping[str, Sequence[I]], code: str, item_id: str
) -> dict[str, tuple[I, ...]]:
    """Drop the item with *item_id* from subject *code*'s collection."""
    items = _subject_items(section, code)
    kept = tuple(item for item in items if item.id != item_id)
    if len(kept) == len(items):
        raise EntityNotFoundError("item", item_id)
    return replace_subject_entry(section, code, kept)  # type: ignore[arg-type]


def replace_item[I: _HasId](
    section: Mapping[str, Sequence[I]],
    code: str,
    item_id: str,
    change: Callable[[I], I],
) -> dict[str, tuple[I, ...]]:
    """Replace one item of subject *code* with ``change(item)``."""
    items = _subject_items(section, code)
    for index, item in enumerate(items):
        if item.id == item_id:
            updated = (*items[:index], change(item), *items[index + 1 :])
            return replace_subject_entry(section, code, updated)  # type: ignore[arg-type]
    raise EntityNotFoundError("item", item_id)


def _subject_items[I](section: Mapping[str, Sequence[I]], code: str) -> tuple[I, ...]:
    # A subject with nothing recorded yet has no entry in the section.
    return tuple(section.get(code, ()))


# ---------------------------------------------------------------------------
# Syllabus
# ---------------------------------------------------------------------------


def set_topic_status(
    syllabus_section: Mapping[str, Mapping[str, Unit]],
    code: str,
    unit_name: str,
    topic_id: str,
    status: TopicStatus,
) -> dict[str, dict[str, Unit]]:
    """Set one topic's status, copying only subject -> unit -> topic."""
    syllabus = syllabus_section.get(code)
    if syllabus is None:
        raise EntityNotFoundError("subject", code)
    unit = syllabus.get(unit_name)
    if unit is None:
        raise EntityNotFoundError("unit", unit_name)

    for index, topic in enumerate(unit.topics):
        if topic.id == topic_id:
            new_topic = topic.model_copy(update={"status": status.value})
            topics = (*unit.topics[:index], new_topic, *unit.topics[index + 1 :])
            new_unit = unit.model_copy(update={"topics": topics})
            return replace_subject_entry(
                syllabus_section,
                code,
                replace_subject_entry(syllabus, unit_name, new_unit),
            )  # type: ignore[return-value]
    raise EntityNotFoundError("topic", topic_id)


def find_topic_status(
    syllabus_section: Mapping[str, Mapping[str, Unit]],
    code: str,
    unit_name: str,
    topic_id: str,
) -> str | None:
    """Return the raw stored status of one topic."""
    unit = syllabus_section.get(code, {}).get(unit_name)
    if unit is None:
        raise EntityNotFoundError("unit", unit_name)
    for topic in unit.topics:
        if topic.id == topic_id:
            return topic.status
    raise EntityNotFoundError("topic", topic_id)


def cycle_topic_status(
    syllabus_section: Mapping[str, Mapping[str, Unit]],
    code: str,
    unit_name: str,
    topic_id: str,
) -> tuple[dict[str, dict[str, Unit]], TopicStatus]:
    """Advance one topic along the syllabus cycle."""
    if code not in syllabus_section:
        raise EntityNotFoundError("subject", code)
    current = find_topic_status(syllabus_section, code, unit_name, topic_id)
    new_status = advance_syllabus_status(current)
    updated = set_topic_status(syllabus_section, code, unit_name, topic_id, new_status)
    return updated, new_status


# ---------------------------------------------------------------------------
# PYQ
# ---------------------------------------------------------------------------


def cycle_pyq_status(
    pyq_section: Mapping[str, Sequence[PyqItem]],
    code: str,
    item_id: str,
) -> tuple[dict[str, tuple[PyqItem, ...]], PyqStatus]:
    """Advance one PYQ item along the practice cycle."""
    advanced: list[PyqStatus] = []

    def _advance(item: PyqItem) -> PyqItem:
        new_status = advance_pyq_status(item.status)
        advanced.append(new_status)
        return item.model_copy(update={"status": new_status.value})

    updated = replace_item(pyq_section, code, item_id, _advance)
    return updated, advanced[0]


# ---------------------------------------------------------------------------
# Attendance
# ---------------------------------------------------------------------------


def mark_attendance_day(
    attendance_section: Mapping[str, AttendanceRecord],
    code: str,
    day: dt.date,
    status: DayStatus | None,
) -> dict[str, AttendanceRecord]:
    """Mark, re-mark, or clear (*status* None) one day and recount totals.

    A subject without a record starts from an empty one.
    """
    record = attendance_section.get(code) or AttendanceRecord()
    history: list[AttendanceEntry] = []
    found = False
    for entry in record.history:
        if entry.date != day:
            history.append(entry)
            continue
        found = True
        if status is not None:
            history.append(entry.model_copy(update={"status": status}))
    if not found and status is not None:
        history.append(AttendanceEntry(date=day, status=status))

    new_record = AttendanceRecord.from_history(tuple(history))
    return replace_subject_entry(attendance_section, code, new_record)


def cycle_attendance_day(
    attendance_section: Mapping[str, AttendanceRecord],
    code: str,
    day: dt.date,
) -> tuple[dict[str, AttendanceRecord], DayStatus | None]:
    """Advance one day along unmarked -> present -> absent -> holiday."""
    record = attendance_section.get(code) or AttendanceRecord()
    new_status = advance_day_status(record.status_on(day))
    return mark_attendance_day(attendance_section, code, day, new_status), new_status
