"""Tests for status enums, successor tables, and coercion."""

import pytest

from studyctl.domain.errors import InvalidStatusError
from studyctl.domain.lifecycle import (
    DAY_TRANSITIONS,
    PYQ_TRANSITIONS,
    TOPIC_TRANSITIONS,
    DayStatus,
    PyqStatus,
    TopicStatus,
    advance_day_status,
    advance_pyq_status,
    advance_syllabus_status,
    coerce_pyq_status,
    coerce_topic_status,
    is_known_pyq_status,
    is_known_topic_status,
    parse_day_status,
    parse_topic_status,
)


class TestTopicStatus:
    def test_members(self) -> None:
        assert {s.value for s in TopicStatus} == {"not-started", "in-progress", "completed"}

    def test_cycle(self) -> None:
        assert advance_syllabus_status("not-started") == TopicStatus.IN_PROGRESS
        assert advance_syllabus_status("in-progress") == TopicStatus.COMPLETED
        assert advance_syllabus_status("completed") == TopicStatus.NOT_STARTED

    def test_three_steps_return_to_start(self) -> None:
        for start in TopicStatus:
            status: TopicStatus = start
            for _ in range(3):
                status = advance_syllabus_status(status)
            assert status == start

    @pytest.mark.parametrize("raw", [None, "", "done", "COMPLETED", 3])
    def test_missing_or_unknown_reads_as_not_started(self, raw: object) -> None:
        assert coerce_topic_status(raw) == TopicStatus.NOT_STARTED
        assert advance_syllabus_status(raw) == TopicStatus.IN_PROGRESS

    def test_parse_explicit(self) -> None:
        assert parse_topic_status("completed") == TopicStatus.COMPLETED
        with pytest.raises(InvalidStatusError) as exc_info:
            parse_topic_status("done")
        assert exc_info.value.allowed == ["not-started", "in-progress", "completed"]

    def test_every_status_has_a_successor(self) -> None:
        assert set(TOPIC_TRANSITIONS) == set(TopicStatus)


class TestPyqStatus:
    def test_members(self) -> None:
        assert {s.value for s in PyqStatus} == {"not-started", "practiced", "mastered"}

    def test_cycle(self) -> None:
        assert advance_pyq_status("not-started") == PyqStatus.PRACTICED
        assert advance_pyq_status("practiced") == PyqStatus.MASTERED
        assert advance_pyq_status("mastered") == PyqStatus.NOT_STARTED

    def test_legacy_not_done_alias(self) -> None:
        assert is_known_pyq_status("not-done")
        assert coerce_pyq_status("not-done") == PyqStatus.NOT_STARTED
        assert advance_pyq_status("not-done") == PyqStatus.PRACTICED

    def test_missing_reads_as_not_started(self) -> None:
        assert advance_pyq_status(None) == PyqStatus.PRACTICED
        assert not is_known_pyq_status(None)

    def test_unknown_is_not_known(self) -> None:
        assert not is_known_pyq_status("skipped")
        assert coerce_pyq_status("skipped") == PyqStatus.NOT_STARTED

    def test_every_status_has_a_successor(self) -> None:
        assert set(PYQ_TRANSITIONS) == set(PyqStatus)
        assert set(PYQ_TRANSITIONS.values()) == set(PyqStatus)


class TestDayStatus:
    def test_cycle_through_unmarked(self) -> None:
        assert advance_day_status(None) == DayStatus.PRESENT
        assert advance_day_status("present") == DayStatus.ABSENT
        assert advance_day_status("absent") == DayStatus.HOLIDAY
        assert advance_day_status("holiday") is None

    def test_table_has_unmarked_key(self) -> None:
        assert None in DAY_TRANSITIONS
        assert len(DAY_TRANSITIONS) == 4

    def test_unknown_day_status_raises(self) -> None:
        with pytest.raises(ValueError):
            advance_day_status("sick")

    def test_parse_explicit(self) -> None:
        assert parse_day_status("holiday") == DayStatus.HOLIDAY
        with pytest.raises(InvalidStatusError, match="late"):
            parse_day_status("late")


class TestKnownTopicStatus:
    def test_known(self) -> None:
        assert is_known_topic_status("completed")

    def test_non_string(self) -> None:
        assert not is_known_topic_status(None)
        assert not is_known_topic_status(1)
