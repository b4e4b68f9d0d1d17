"""SyllabusService — topic status changes and syllabus progress."""

from __future__ import annotations

from typing import Any

from studyctl.domain.errors import EntityNotFoundError, InvalidStatusError
from studyctl.domain.filters import search_subjects
from studyctl.domain.lifecycle import TopicStatus, parse_topic_status
from studyctl.domain.progress import subject_syllabus_progress, unit_progress
from studyctl.domain.state import Section, cycle_topic_status, set_topic_status
from studyctl.services.base import BaseService
from studyctl.services.result import ServiceResult
from studyctl.services.telemetry import traced


class SyllabusService(BaseService):
    """Reads and edits one subject's syllabus."""

    @traced
    def show(self, code: str) -> ServiceResult:
        """Units with their topics, statuses, and per-unit figures."""
        op = "syllabus_show"
        if (missing := self._require_subject(op, code)) is not None:
            return missing

        syllabus = self._tree.syllabus.get(code, {})
        units: list[dict[str, Any]] = []
        for unit_name, unit in syllabus.items():
            figures = unit_progress(unit)
            units.append(
                {
                    "unit": unit_name,
                    "title": unit.title,
                    **figures.model_dump(),
                    "topics": [
                        {"id": t.id, "name": t.name, "status": t.effective_status.value}
                        for t in unit.topics
                    ],
                }
            )
        progress = subject_syllabus_progress(syllabus)
        return ServiceResult(
            ok=True,
            op=op,
            data={"subject": code, **progress.model_dump(), "units": units},
            warnings=self._malformed_warnings(subject=code, entity="topic"),
        )

    @traced
    def progress(self, code: str | None = None) -> ServiceResult:
        """Syllabus figures for one subject, or for every subject."""
        op = "syllabus_progress"
        if code is not None:
            if (missing := self._require_subject(op, code)) is not None:
                return missing
            codes = [code]
        else:
            codes = list(self._tree.subjects)

        items = [
            {
                "subject": c,
                "name": self._tree.subjects[c].name,
                **subject_syllabus_progress(self._tree.syllabus.get(c, {})).model_dump(),
            }
            for c in codes
        ]
        return ServiceResult(ok=True, op=op, data={"count": len(items), "items": items})

    @traced
    def cycle(self, code: str, unit: str, topic_id: str) -> ServiceResult:
        """Advance one topic: not-started -> in-progress -> completed -> not-started."""
        op = "cycle_topic"
        if (missing := self._require_subject(op, code)) is not None:
            return missing

        advanced: list[TopicStatus] = []

        def _edit(section: Any) -> Any:
            updated, status = cycle_topic_status(section, code, unit, topic_id)
            advanced.append(status)
            return updated

        try:
            tree = self._workspace.apply(Section.SYLLABUS, _edit)
        except EntityNotFoundError as exc:
            return ServiceResult.fail(op, "NOT_FOUND", str(exc), kind=exc.kind, key=exc.key)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "subject": code,
                "unit": unit,
                "id": topic_id,
                "status": advanced[0].value,
                "percent": subject_syllabus_progress(tree.syllabus[code]).percent,
            },
        )

    @traced
    def set_status(self, code: str, unit: str, topic_id: str, status: str) -> ServiceResult:
        """Set one topic to an explicit status."""
        op = "set_topic_status"
        if (missing := self._require_subject(op, code)) is not None:
            return missing
        try:
            target = parse_topic_status(status)
        except InvalidStatusError as exc:
            return ServiceResult.fail(op, "INVALID_STATUS", str(exc), allowed=exc.allowed)

        try:
            tree = self._workspace.apply(
                Section.SYLLABUS,
                lambda section: set_topic_status(section, code, unit, topic_id, target),
            )
        except EntityNotFoundError as exc:
            return ServiceResult.fail(op, "NOT_FOUND", str(exc), kind=exc.kind, key=exc.key)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "subject": code,
                "unit": unit,
                "id": topic_id,
                "status": target.value,
                "percent": subject_syllabus_progress(tree.syllabus[code]).percent,
            },
        )

    @traced
    def subjects(self, query: str = "") -> ServiceResult:
        """Subjects whose code, name, or short name contains *query*."""
        tree = self._tree
        items = [
            {
                "code": code,
                "name": tree.subjects[code].name,
                "short_name": tree.subjects[code].short_name,
                "credits": tree.subjects[code].credits,
            }
            for code in search_subjects(tree.subjects, query)
        ]
        return ServiceResult(
            ok=True, op="list_subjects", data={"query": query, "count": len(items), "items": items}
        )
