"""Status machines for syllabus topics, PYQ items, and attendance days.

Each machine is a closed enum plus a successor table:
- Syllabus topics: not-started -> in-progress -> completed -> not-started
- PYQ items: not-started -> practiced -> mastered -> not-started
- Attendance days: unmarked -> present -> absent -> holiday -> unmarked

Topic and PYQ machines are total. Missing or unrecognized input is read
as ``not-started`` before advancing, so advancing never fails.
"""

from __future__ import annotations

from enum import StrEnum

from studyctl.domain.errors import InvalidStatusError

# --- Status enums ---


class TopicStatus(StrEnum):
    """Completion status of a syllabus topic."""

    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class PyqStatus(StrEnum):
    """Practice status of a previous-year question."""

    NOT_STARTED = "not-started"
    PRACTICED = "practiced"
    MASTERED = "mastered"


class DayStatus(StrEnum):
    """Attendance mark for a single calendar day."""

    PRESENT = "present"
    ABSENT = "absent"
    HOLIDAY = "holiday"


# --- Successor tables ---

TOPIC_TRANSITIONS: dict[TopicStatus, TopicStatus] = {
    TopicStatus.NOT_STARTED: TopicStatus.IN_PROGRESS,
    TopicStatus.IN_PROGRESS: TopicStatus.COMPLETED,
    TopicStatus.COMPLETED: TopicStatus.NOT_STARTED,
}

PYQ_TRANSITIONS: dict[PyqStatus, PyqStatus] = {
    PyqStatus.NOT_STARTED: PyqStatus.PRACTICED,
    PyqStatus.PRACTICED: PyqStatus.MASTERED,
    PyqStatus.MASTERED: PyqStatus.NOT_STARTED,
}

# None is an unmarked day.
DAY_TRANSITIONS: dict[DayStatus | None, DayStatus | None] = {
    None: DayStatus.PRESENT,
    DayStatus.PRESENT: DayStatus.ABSENT,
    DayStatus.ABSENT: DayStatus.HOLIDAY,
    DayStatus.HOLIDAY: None,
}

# Older data stored un-attempted questions as "not-done".
PYQ_STATUS_ALIASES: dict[str, PyqStatus] = {
    "not-done": PyqStatus.NOT_STARTED,
}


# --- Coercion ---


def is_known_topic_status(value: object) -> bool:
    """Return True if *value* is one of the topic statuses."""
    return isinstance(value, str) and value in TopicStatus._value2member_map_


def is_known_pyq_status(value: object) -> bool:
    """Return True if *value* is a PYQ status or a legacy alias of one."""
    return isinstance(value, str) and (
        value in PyqStatus._value2member_map_ or value in PYQ_STATUS_ALIASES
    )


def coerce_topic_status(value: object) -> TopicStatus:
    """Read a stored topic status; missing or unknown values become not-started."""
    if is_known_topic_status(value):
        return TopicStatus(str(value))
    return TopicStatus.NOT_STARTED


def coerce_pyq_status(value: object) -> PyqStatus:
    """Read a stored PYQ status; missing or unknown values become not-started."""
    if not isinstance(value, str):
        return PyqStatus.NOT_STARTED
    if value in PYQ_STATUS_ALIASES:
        return PYQ_STATUS_ALIASES[value]
    if value in PyqStatus._value2member_map_:
        return PyqStatus(value)
    return PyqStatus.NOT_STARTED


# --- Advancing ---


def advance_syllabus_status(status: object) -> TopicStatus:
    """Return the successor of a topic status.

    >>> advance_syllabus_status(None)
    <TopicStatus.IN_PROGRESS: 'in-progress'>
    """
    return TOPIC_TRANSITIONS[coerce_topic_status(status)]


def advance_pyq_status(status: object) -> PyqStatus:
    """Return the successor of a PYQ status.

    >>> advance_pyq_status("mastered")
    <PyqStatus.NOT_STARTED: 'not-started'>
    """
    return PYQ_TRANSITIONS[coerce_pyq_status(status)]


def advance_day_status(status: str | None) -> DayStatus | None:
    """Return the next attendance mark for a day (None means unmarked)."""
    current = DayStatus(status) if status is not None else None
    return DAY_TRANSITIONS[current]


# --- Explicit parsing ---


def parse_topic_status(value: str) -> TopicStatus:
    """Parse a status the user asked for. Unlike coercion, unknown values raise.

    Raises:
        InvalidStatusError: *value* is not a topic status.
    """
    try:
        return TopicStatus(value)
    except ValueError:
        raise InvalidStatusError(value, [s.value for s in TopicStatus]) from None


def parse_day_status(value: str) -> DayStatus:
    try:
        return DayStatus(value)
    except ValueError:
        raise InvalidStatusError(value, [s.value for s in DayStatus]) from None
