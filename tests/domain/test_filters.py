"""Tests for note search, PYQ filters, and subject search."""

from __future__ import annotations

import pytest

from studyctl.domain.errors import InvalidFilterError
from studyctl.domain.filters import (
    PyqFilter,
    filter_pyqs,
    parse_pyq_filter,
    search_notes,
    search_pyqs,
    search_subjects,
    text_matches,
)
from studyctl.domain.models import Note, PyqItem
from studyctl.domain.state import StateTree


@pytest.fixture
def exam_notes() -> list[Note]:
    return [
        Note(id="a", title="Exam tips"),
        Note(id="b", title="Homework", content="for exam prep"),
        Note(id="c", title="Other", tags=("exam",)),
        Note(id="d", title="Unrelated", content="nothing here"),
    ]


class TestTextMatches:
    def test_empty_query_matches(self) -> None:
        assert text_matches("", "anything")
        assert text_matches("", "")

    def test_case_insensitive(self) -> None:
        assert text_matches("PAGING", "Explain paging")

    def test_tags(self) -> None:
        assert text_matches("rev", "title", tags=("revision",))
        assert not text_matches("rev", "title", tags=())


class TestSearchNotes:
    def test_matches_title_content_and_tag(self, exam_notes: list[Note]) -> None:
        assert [n.id for n in search_notes(exam_notes, "exam")] == ["a", "b", "c"]

    def test_case_does_not_matter(self, exam_notes: list[Note]) -> None:
        assert [n.id for n in search_notes(exam_notes, "EXAM")] == ["a", "b", "c"]

    def test_empty_query_returns_all(self, exam_notes: list[Note]) -> None:
        assert len(search_notes(exam_notes, "")) == 4

    def test_fresh_list(self, exam_notes: list[Note]) -> None:
        result = search_notes(exam_notes, "")
        assert result is not exam_notes
        assert result == exam_notes


class TestPyqFilter:
    @pytest.fixture
    def items(self) -> list[PyqItem]:
        return [
            PyqItem(id="1", question="Q1"),
            PyqItem(id="2", question="Q2", status="practiced"),
            PyqItem(id="3", question="Q3", status="mastered"),
            PyqItem(id="4", question="Q4", status="not-started"),
        ]

    def test_not_done(self, items: list[PyqItem]) -> None:
        assert [q.id for q in filter_pyqs(items, "not-done")] == ["1", "4"]

    def test_practiced(self, items: list[PyqItem]) -> None:
        assert [q.id for q in filter_pyqs(items, "practiced")] == ["2"]

    def test_mastered(self, items: list[PyqItem]) -> None:
        assert [q.id for q in filter_pyqs(items, PyqFilter.MASTERED)] == ["3"]

    def test_all(self, items: list[PyqItem]) -> None:
        assert [q.id for q in filter_pyqs(items, "all")] == ["1", "2", "3", "4"]

    def test_unknown_key_rejected(self, items: list[PyqItem]) -> None:
        with pytest.raises(InvalidFilterError) as exc_info:
            filter_pyqs(items, "done")
        assert exc_info.value.key == "done"

    def test_parse(self) -> None:
        assert parse_pyq_filter("not-done") is PyqFilter.NOT_DONE

    def test_legacy_status_counts_as_not_done(self, sample_tree: StateTree) -> None:
        selected = filter_pyqs(sample_tree.pyq["CS101"], "not-done")
        assert [q.id for q in selected] == ["q1", "q4"]


class TestSearchPyqs:
    def test_by_year(self, sample_tree: StateTree) -> None:
        assert [q.id for q in search_pyqs(sample_tree.pyq["CS101"], "2022")] == ["q2", "q4"]

    def test_by_module(self, sample_tree: StateTree) -> None:
        assert [q.id for q in search_pyqs(sample_tree.pyq["CS101"], "unit 3")] == ["q2"]

    def test_by_tag(self, sample_tree: StateTree) -> None:
        assert [q.id for q in search_pyqs(sample_tree.pyq["CS101"], "EXAM")] == ["q3"]


class TestSearchSubjects:
    def test_by_code_name_or_short_name(self, sample_tree: StateTree) -> None:
        assert search_subjects(sample_tree.subjects, "cs1") == ["CS101"]
        assert search_subjects(sample_tree.subjects, "algebra") == ["MA201"]
        assert search_subjects(sample_tree.subjects, "la") == ["MA201"]

    def test_empty_query(self, sample_tree: StateTree) -> None:
        assert search_subjects(sample_tree.subjects, "") == ["CS101", "MA201"]
