"""PyqService — previous-year question tracking."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from studyctl.domain.errors import EntityNotFoundError, InvalidFilterError
from studyctl.domain.filters import PyqFilter, filter_pyqs, search_pyqs
from studyctl.domain.ids import generate_id
from studyctl.domain.lifecycle import PyqStatus
from studyctl.domain.models import PyqItem
from studyctl.domain.progress import pyq_stats
from studyctl.domain.state import Section, append_item, cycle_pyq_status, remove_item
from studyctl.services.base import BaseService
from studyctl.services.result import ServiceResult
from studyctl.services.telemetry import trace_span, traced


def _item_row(item: PyqItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "question": item.question,
        "year": item.year,
        "marks": item.marks,
        "module": item.module,
        "difficulty": item.difficulty,
        "tags": list(item.tags),
        "status": item.effective_status.value,
    }


class PyqService(BaseService):
    """Adds, removes, cycles, filters, and summarizes PYQ items."""

    @traced
    def list_items(
        self,
        code: str,
        *,
        status_filter: str | None = None,
        query: str = "",
    ) -> ServiceResult:
        """Items of one subject, narrowed by status filter and text query."""
        op = "list_pyqs"
        if (missing := self._require_subject(op, code)) is not None:
            return missing

        key = status_filter or self._workspace.settings.pyq.default_filter
        questions = self._tree.pyq.get(code, ())
        try:
            with trace_span("filter") as span:
                selected = filter_pyqs(search_pyqs(questions, query), key)
                if span:
                    span.annotate("matched", len(selected))
        except InvalidFilterError as exc:
            return ServiceResult.fail(
                op,
                "INVALID_FILTER",
                str(exc),
                allowed=[f.value for f in PyqFilter],
            )

        items = [_item_row(q) for q in selected]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "subject": code,
                "filter": key,
                "query": query,
                "count": len(items),
                "items": items,
            },
            warnings=self._malformed_warnings(subject=code, entity="pyq"),
        )

    @traced
    def add(
        self,
        code: str,
        question: str,
        *,
        year: str = "",
        marks: Any = 0,
        module: str = "",
        difficulty: str = "medium",
        tags: tuple[str, ...] | list[str] = (),
    ) -> ServiceResult:
        """Append a new not-started question to a subject."""
        op = "add_pyq"
        if (missing := self._require_subject(op, code)) is not None:
            return missing
        if not question.strip():
            return ServiceResult.fail(op, "INVALID_INPUT", "Question text is required")

        try:
            item = PyqItem(
                id=generate_id(),
                question=question.strip(),
                year=year,
                marks=marks,
                module=module,
                difficulty=difficulty,
                tags=tags,
                status=PyqStatus.NOT_STARTED.value,
            )
        except ValidationError as exc:
            return ServiceResult.fail(op, "INVALID_INPUT", str(exc))

        self._workspace.apply(Section.PYQ, lambda section: append_item(section, code, item))
        return ServiceResult(ok=True, op=op, data={"subject": code, **_item_row(item)})

    @traced
    def delete(self, code: str, item_id: str) -> ServiceResult:
        """Remove a question by id."""
        op = "delete_pyq"
        if (missing := self._require_subject(op, code)) is not None:
            return missing
        try:
            self._workspace.apply(Section.PYQ, lambda section: remove_item(section, code, item_id))
        except EntityNotFoundError as exc:
            return ServiceResult.fail(op, "NOT_FOUND", str(exc), kind=exc.kind, key=exc.key)
        return ServiceResult(ok=True, op=op, data={"subject": code, "id": item_id})

    @traced
    def cycle(self, code: str, item_id: str) -> ServiceResult:
        """Advance a question: not-started -> practiced -> mastered -> not-started."""
        op = "cycle_pyq"
        if (missing := self._require_subject(op, code)) is not None:
            return missing

        advanced: list[PyqStatus] = []

        def _edit(section: Any) -> Any:
            updated, status = cycle_pyq_status(section, code, item_id)
            advanced.append(status)
            return updated

        try:
            self._workspace.apply(Section.PYQ, _edit)
        except EntityNotFoundError as exc:
            return ServiceResult.fail(op, "NOT_FOUND", str(exc), kind=exc.kind, key=exc.key)
        return ServiceResult(
            ok=True,
            op=op,
            data={"subject": code, "id": item_id, "status": advanced[0].value},
        )

    @traced
    def stats(self, code: str | None = None) -> ServiceResult:
        """Practice counts for one subject, or for every subject."""
        op = "pyq_stats"
        if code is not None:
            if (missing := self._require_subject(op, code)) is not None:
                return missing
            codes = [code]
        else:
            codes = list(self._tree.subjects)

        items = [
            {"subject": c, **pyq_stats(self._tree.pyq.get(c, ())).model_dump()} for c in codes
        ]
        return ServiceResult(ok=True, op=op, data={"count": len(items), "items": items})
