"""Tests for roll-up arithmetic: unit, subject, PYQ, attendance, overall."""

from __future__ import annotations

import pytest

from studyctl.domain.models import AttendanceRecord, PyqItem, Subject, Topic, Unit
from studyctl.domain.progress import (
    attendance_percent,
    attendance_summary,
    can_skip,
    classes_needed,
    overall_progress,
    percent_of,
    pyq_stats,
    subject_syllabus_progress,
    unit_progress,
)
from studyctl.domain.state import StateTree


def _unit(*statuses: str | None) -> Unit:
    return Unit(
        title="U",
        topics=tuple(
            Topic(id=f"t{i}", name=f"T{i}", status=s) for i, s in enumerate(statuses)
        ),
    )


class TestPercentOf:
    @pytest.mark.parametrize(
        ("part", "whole", "expected"),
        [(1, 3, 33), (2, 3, 67), (1, 2, 50), (1, 8, 13), (3, 8, 38), (0, 5, 0), (5, 5, 100)],
    )
    def test_rounds_half_up(self, part: int, whole: int, expected: int) -> None:
        assert percent_of(part, whole) == expected

    def test_empty_default(self) -> None:
        assert percent_of(0, 0) == 0
        assert percent_of(0, 0, empty=100) == 100


class TestUnitProgress:
    def test_mixed_unit(self) -> None:
        figures = unit_progress(_unit("not-started", "completed", "in-progress"))
        assert (figures.completed, figures.total, figures.percent) == (1, 3, 33)
        assert figures.in_progress == 1

    def test_empty_unit(self) -> None:
        figures = unit_progress(Unit())
        assert (figures.completed, figures.total, figures.percent) == (0, 0, 0)

    def test_missing_status_counts_as_not_started(self) -> None:
        figures = unit_progress(_unit(None, "bogus", "completed"))
        assert (figures.completed, figures.in_progress, figures.total) == (1, 0, 3)


class TestSubjectSyllabusProgress:
    def test_sums_units(self) -> None:
        syllabus = {
            "Unit 1": _unit("completed", "in-progress"),
            "Unit 2": _unit("completed", "not-started", None),
        }
        figures = subject_syllabus_progress(syllabus)
        assert figures.completed_topics == 2
        assert figures.in_progress_topics == 1
        assert figures.total_topics == 5
        assert figures.percent == 40
        assert figures.remaining == 2

    def test_empty(self) -> None:
        figures = subject_syllabus_progress({})
        assert figures.percent == 0
        assert figures.remaining == 0

    def test_remaining_in_dump(self) -> None:
        assert "remaining" in subject_syllabus_progress({}).model_dump()


class TestPyqStats:
    def test_counts(self, sample_tree: StateTree) -> None:
        stats = pyq_stats(sample_tree.pyq["CS101"])
        assert (stats.total, stats.mastered, stats.practiced, stats.not_done) == (4, 1, 1, 2)
        assert stats.mastery_percent == 25

    def test_counts_sum_to_total(self) -> None:
        items = [
            PyqItem(id=str(i), question="Q", status=s)
            for i, s in enumerate([None, "practiced", "mastered", "not-started", "weird"])
        ]
        stats = pyq_stats(items)
        assert stats.mastered + stats.practiced + stats.not_done == stats.total == 5
        assert stats.not_done == 3

    def test_empty(self) -> None:
        stats = pyq_stats([])
        assert stats.total == 0
        assert stats.mastery_percent == 0


class TestAttendance:
    def test_percent(self) -> None:
        assert attendance_percent(AttendanceRecord(total=4, attended=3)) == 75

    def test_no_classes_is_full_attendance(self) -> None:
        assert attendance_percent(AttendanceRecord()) == 100

    def test_classes_needed(self) -> None:
        # 6/10 -> need 6 in a row to reach 12/16 = 75%
        record = AttendanceRecord(total=10, attended=6)
        assert classes_needed(record) == 6
        assert can_skip(record) == 0

    def test_can_skip(self) -> None:
        # 9/10 -> skipping 2 gives 9/12 = 75%
        record = AttendanceRecord(total=10, attended=9)
        assert classes_needed(record) == 0
        assert can_skip(record) == 2

    def test_exactly_at_threshold(self) -> None:
        record = AttendanceRecord(total=4, attended=3)
        assert classes_needed(record) == 0
        assert can_skip(record) == 0

    def test_custom_threshold(self) -> None:
        record = AttendanceRecord(total=10, attended=6)
        assert classes_needed(record, threshold=50) == 0
        assert can_skip(record, threshold=50) == 2

    @pytest.mark.parametrize("threshold", [0, 100, 150, -5])
    def test_threshold_out_of_range(self, threshold: int) -> None:
        with pytest.raises(ValueError, match="between 1 and 99"):
            classes_needed(AttendanceRecord(), threshold=threshold)

    def test_summary(self) -> None:
        summary = attendance_summary(AttendanceRecord(total=10, attended=6))
        assert summary.percent == 60
        assert summary.threshold == 75
        assert summary.classes_needed == 6
        assert summary.can_skip == 0


class TestOverallProgress:
    def test_mean_of_subjects(self, sample_tree: StateTree) -> None:
        # CS101 33%, MA201 0% -> 16.5 rounds to 17
        assert overall_progress(sample_tree.subjects, sample_tree.syllabus) == 17

    def test_no_subjects(self) -> None:
        assert overall_progress({}, {}) == 0

    def test_subject_without_syllabus_counts_as_zero(self) -> None:
        subjects = {
            "A": Subject(code="A", name="A"),
            "B": Subject(code="B", name="B"),
        }
        syllabus = {"A": {"U": _unit("completed")}}
        assert overall_progress(subjects, syllabus) == 50
