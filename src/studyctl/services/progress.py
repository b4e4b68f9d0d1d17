"""ProgressService — cross-subject dashboard, weak areas, revision plans."""

from __future__ import annotations

from studyctl.domain.models import AttendanceRecord
from studyctl.domain.progress import (
    attendance_percent,
    overall_progress,
    pyq_stats,
    subject_syllabus_progress,
)
from studyctl.domain.revision import revision_plan, weak_pyqs, weak_topics
from studyctl.services.base import BaseService
from studyctl.services.result import ServiceResult
from studyctl.services.telemetry import get_current_span, traced


class ProgressService(BaseService):
    """Derived figures across every subject in the tree."""

    @traced
    def overview(self) -> ServiceResult:
        """One row per subject plus the overall syllabus percent."""
        tree = self._tree
        items = []
        for code, subject in tree.subjects.items():
            syllabus = subject_syllabus_progress(tree.syllabus.get(code, {}))
            pyq = pyq_stats(tree.pyq.get(code, ()))
            record = tree.attendance.get(code) or AttendanceRecord()
            items.append(
                {
                    "subject": code,
                    "name": subject.short_name or subject.name,
                    "syllabus_percent": syllabus.percent,
                    "topics_completed": syllabus.completed_topics,
                    "topics_total": syllabus.total_topics,
                    "pyq_mastered": pyq.mastered,
                    "pyq_total": pyq.total,
                    "attendance_percent": attendance_percent(record),
                    "notes": len(tree.notes.get(code, ())),
                }
            )
        return ServiceResult(
            ok=True,
            op="overview",
            data={
                "overall_percent": overall_progress(tree.subjects, tree.syllabus),
                "count": len(items),
                "items": items,
            },
            warnings=self._malformed_warnings(),
        )

    @traced
    def weak_areas(self) -> ServiceResult:
        """Incomplete topics and unmastered PYQs."""
        tree = self._tree
        topics = [t.model_dump() for t in weak_topics(tree)]
        pyqs = [q.model_dump() for q in weak_pyqs(tree)]
        return ServiceResult(
            ok=True,
            op="weak_areas",
            data={
                "topic_count": len(topics),
                "pyq_count": len(pyqs),
                "topics": topics,
                "pyqs": pyqs,
            },
        )

    @traced
    def plan(self, days: int | None = None) -> ServiceResult:
        """Spread weak areas over *days* (default from ``[revision]`` config)."""
        op = "revision_plan"
        count = days if days is not None else self._workspace.settings.revision.default_days
        if (span := get_current_span()) is not None:
            span.annotate("days", count)
        try:
            plan = revision_plan(self._tree, count)
        except ValueError as exc:
            return ServiceResult.fail(op, "INVALID_INPUT", str(exc))
        return ServiceResult(
            ok=True,
            op=op,
            data={"days": count, "plan": [day.model_dump() for day in plan]},
        )
