"""Roll-up arithmetic from leaf statuses to unit, subject, and global figures.

Every function is a pure computation over the data it is given and is
re-evaluated on each call; nothing is cached. Percentages are integers
rounded half-up, and empty collections never divide by zero:

- Syllabus/unit/PYQ percent of an empty collection is 0.
- Attendance percent with no recorded classes is 100.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from fractions import Fraction

from pydantic import BaseModel, computed_field

from studyctl.domain.lifecycle import PyqStatus, TopicStatus
from studyctl.domain.models import AttendanceRecord, PyqItem, Subject, Unit

DEFAULT_ATTENDANCE_THRESHOLD = 75


def percent_of(part: int, whole: int, *, empty: int = 0) -> int:
    """Return ``100 * part / whole`` rounded half-up, or *empty* when whole is 0.

    >>> percent_of(1, 3)
    33
    >>> percent_of(1, 8)
    13
    >>> percent_of(0, 0, empty=100)
    100
    """
    if whole <= 0:
        return empty
    return (200 * part + whole) // (2 * whole)


class UnitProgress(BaseModel):
    """Completion figures for one unit."""

    model_config = {"frozen": True}

    completed: int
    in_progress: int = 0
    total: int
    percent: int


class SyllabusProgress(BaseModel):
    """Completion figures for one subject's whole syllabus."""

    model_config = {"frozen": True}

    completed_topics: int
    in_progress_topics: int
    total_topics: int
    percent: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def remaining(self) -> int:
        return self.total_topics - self.completed_topics - self.in_progress_topics


class PyqStats(BaseModel):
    """Practice counts for one subject's PYQ set."""

    model_config = {"frozen": True}

    total: int
    mastered: int
    practiced: int
    not_done: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def mastery_percent(self) -> int:
        return percent_of(self.mastered, self.total)


class AttendanceSummary(BaseModel):
    """Attendance percent plus how far the student is from the threshold."""

    model_config = {"frozen": True}

    total: int
    attended: int
    percent: int
    threshold: int
    classes_needed: int
    can_skip: int


def unit_progress(unit: Unit) -> UnitProgress:
    """Count completed and in-progress topics in *unit*."""
    completed = 0
    in_progress = 0
    for topic in unit.topics:
        status = topic.effective_status
        if status == TopicStatus.COMPLETED:
            completed += 1
        elif status == TopicStatus.IN_PROGRESS:
            in_progress += 1
    total = len(unit.topics)
    return UnitProgress(
        completed=completed,
        in_progress=in_progress,
        total=total,
        percent=percent_of(completed, total),
    )


def subject_syllabus_progress(syllabus: Mapping[str, Unit]) -> SyllabusProgress:
    """Sum unit figures across a subject's syllabus, in unit order."""
    completed = 0
    in_progress = 0
    total = 0
    for unit in syllabus.values():
        figures = unit_progress(unit)
        completed += figures.completed
        in_progress += figures.in_progress
        total += figures.total
    return SyllabusProgress(
        completed_topics=completed,
        in_progress_topics=in_progress,
        total_topics=total,
        percent=percent_of(completed, total),
    )


def pyq_stats(questions: Iterable[PyqItem]) -> PyqStats:
    """Count PYQ items by practice status; missing status counts as not done."""
    total = mastered = practiced = 0
    for item in questions:
        total += 1
        status = item.effective_status
        if status == PyqStatus.MASTERED:
            mastered += 1
        elif status == PyqStatus.PRACTICED:
            practiced += 1
    return PyqStats(
        total=total,
        mastered=mastered,
        practiced=practiced,
        not_done=total - mastered - practiced,
    )


def attendance_percent(record: AttendanceRecord) -> int:
    """Attended share of classes; 100 when no classes are recorded."""
    return percent_of(record.attended, record.total, empty=100)


def _threshold_fraction(threshold: int) -> Fraction:
    if not 0 < threshold < 100:
        msg = f"Attendance threshold must be between 1 and 99, got {threshold}"
        raise ValueError(msg)
    return Fraction(threshold, 100)


def classes_needed(record: AttendanceRecord, threshold: int = DEFAULT_ATTENDANCE_THRESHOLD) -> int:
    """Consecutive classes to attend before reaching *threshold* percent."""
    t = _threshold_fraction(threshold)
    needed = (t * record.total - record.attended) / (1 - t)
    return max(0, math.ceil(needed))


def can_skip(record: AttendanceRecord, threshold: int = DEFAULT_ATTENDANCE_THRESHOLD) -> int:
    """Classes that can be missed while staying at or above *threshold* percent."""
    t = _threshold_fraction(threshold)
    spare = (record.attended - t * record.total) / t
    return max(0, math.floor(spare))


def attendance_summary(
    record: AttendanceRecord, threshold: int = DEFAULT_ATTENDANCE_THRESHOLD
) -> AttendanceSummary:
    return AttendanceSummary(
        total=record.total,
        attended=record.attended,
        percent=attendance_percent(record),
        threshold=threshold,
        classes_needed=classes_needed(record, threshold),
        can_skip=can_skip(record, threshold),
    )


def overall_progress(
    subjects: Mapping[str, Subject],
    syllabus_section: Mapping[str, Mapping[str, Unit]],
) -> int:
    """Mean of per-subject syllabus percents; subjects with no syllabus count as 0."""
    if not subjects:
        return 0
    percents = [
        subject_syllabus_progress(syllabus_section.get(code, {})).percent for code in subjects
    ]
    return percent_of(sum(percents), 100 * len(percents))
