"""Structural scan for malformed leaf records.

Every reader recovers from these: a missing or unrecognized status counts
as not-started, a missing topic name, question or note title reads as
blank, and a note stored without a date stays undated. This scan only
reports them.
"""

from __future__ import annotations

from studyctl.domain.errors import MalformedEntityWarning
from studyctl.domain.lifecycle import is_known_pyq_status, is_known_topic_status
from studyctl.domain.state import StateTree


def find_malformed(tree: StateTree) -> list[MalformedEntityWarning]:
    """Collect one warning per defaulted field, in subject order."""
    found: list[MalformedEntityWarning] = []

    def report(entity: str, path: str, field: str, value: object, treated_as: str) -> None:
        found.append(MalformedEntityWarning(entity, path, field, value, treated_as=treated_as))

    for code, syllabus in tree.syllabus.items():
        for unit_name, unit in syllabus.items():
            for topic in unit.topics:
                path = f"{code}/{unit_name}/{topic.id}"
                if not topic.name.strip():
                    report("topic", path, "name", topic.name, "blank")
                if not is_known_topic_status(topic.status):
                    report("topic", path, "status", topic.status, "not-started")
    for code, questions in tree.pyq.items():
        for item in questions:
            path = f"{code}/{item.id}"
            if not item.question.strip():
                report("pyq", path, "question", item.question, "blank")
            if not is_known_pyq_status(item.status):
                report("pyq", path, "status", item.status, "not-started")
    for code, notes in tree.notes.items():
        for note in notes:
            path = f"{code}/{note.id}"
            if not note.title.strip():
                report("note", path, "title", note.title, "blank")
            if note.date is None:
                report("note", path, "date", None, "undated")
    return found
