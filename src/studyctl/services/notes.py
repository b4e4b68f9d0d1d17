"""NotesService — free-form notes per subject."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from studyctl.domain.errors import EntityNotFoundError
from studyctl.domain.filters import search_notes
from studyctl.domain.ids import generate_id
from studyctl.domain.models import Note
from studyctl.domain.state import Section, append_item, remove_item
from studyctl.services._helpers import today
from studyctl.services.base import BaseService
from studyctl.services.result import ServiceResult
from studyctl.services.telemetry import traced


def _note_row(note: Note, *, subject: str | None = None) -> dict[str, Any]:
    row: dict[str, Any] = {
        "id": note.id,
        "title": note.title,
        "content": note.content,
        "tags": list(note.tags),
        "date": note.date.isoformat() if note.date else None,
    }
    if subject is not None:
        row["subject"] = subject
    return row


class NotesService(BaseService):
    """Adds, deletes, and searches notes."""

    @traced
    def add(
        self,
        code: str,
        title: str,
        content: str,
        *,
        tags: tuple[str, ...] | list[str] = (),
    ) -> ServiceResult:
        """Create a note dated today. Title and content must be non-blank."""
        op = "add_note"
        if (missing := self._require_subject(op, code)) is not None:
            return missing
        if not title.strip() or not content.strip():
            return ServiceResult.fail(op, "INVALID_INPUT", "Note title and content are required")

        try:
            note = Note(id=generate_id(), title=title, content=content, tags=tags, date=today())
        except ValidationError as exc:
            return ServiceResult.fail(op, "INVALID_INPUT", str(exc))

        self._workspace.apply(Section.NOTES, lambda section: append_item(section, code, note))
        return ServiceResult(ok=True, op=op, data=_note_row(note, subject=code))

    @traced
    def delete(self, code: str, note_id: str) -> ServiceResult:
        op = "delete_note"
        if (missing := self._require_subject(op, code)) is not None:
            return missing
        try:
            self._workspace.apply(
                Section.NOTES, lambda section: remove_item(section, code, note_id)
            )
        except EntityNotFoundError as exc:
            return ServiceResult.fail(op, "NOT_FOUND", str(exc), kind=exc.kind, key=exc.key)
        return ServiceResult(ok=True, op=op, data={"subject": code, "id": note_id})

    @traced
    def search(self, query: str = "", *, code: str | None = None) -> ServiceResult:
        """Notes matching *query* in one subject, or across all subjects.

        An empty query lists every note.
        """
        op = "search_notes"
        tree = self._tree
        if code is not None:
            if (missing := self._require_subject(op, code)) is not None:
                return missing
            codes = [code]
        else:
            codes = list(tree.notes)

        items = [
            _note_row(note, subject=c)
            for c in codes
            for note in search_notes(tree.notes.get(c, ()), query)
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={"query": query, "subject": code, "count": len(items), "items": items},
        )
