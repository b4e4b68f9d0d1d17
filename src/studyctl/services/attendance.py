"""AttendanceService — per-subject attendance and threshold prediction."""

from __future__ import annotations

from typing import Any

from studyctl.domain.errors import InvalidStatusError
from studyctl.domain.lifecycle import DayStatus, parse_day_status
from studyctl.domain.models import AttendanceRecord
from studyctl.domain.progress import attendance_summary
from studyctl.domain.state import Section, cycle_attendance_day, mark_attendance_day
from studyctl.services._helpers import parse_day
from studyctl.services.base import BaseService
from studyctl.services.result import ServiceResult
from studyctl.services.telemetry import traced

# CLI spelling for removing a day's mark.
CLEAR = "clear"


class AttendanceService(BaseService):
    """Summaries and day marks for attendance records."""

    @property
    def _threshold(self) -> int:
        return self._workspace.settings.attendance.threshold

    def _summary(self, code: str) -> dict[str, Any]:
        record = self._tree.attendance.get(code) or AttendanceRecord()
        return {"subject": code, **attendance_summary(record, self._threshold).model_dump()}

    @traced
    def show(self, code: str | None = None) -> ServiceResult:
        """Attendance figures for one subject, or for every subject."""
        op = "attendance_show"
        if code is not None:
            if (missing := self._require_subject(op, code)) is not None:
                return missing
            codes = [code]
        else:
            codes = list(self._tree.subjects)

        items = [self._summary(c) for c in codes]
        warnings = [
            f"{item['subject']}: {item['percent']}% is below {self._threshold}%"
            for item in items
            if item["percent"] < self._threshold
        ]
        return ServiceResult(
            ok=True, op=op, data={"count": len(items), "items": items}, warnings=warnings
        )

    @traced
    def mark(self, code: str, status: str, *, day: str | None = None) -> ServiceResult:
        """Mark *day* (default today) present/absent/holiday, or ``clear`` it."""
        op = "mark_attendance"
        if (missing := self._require_subject(op, code)) is not None:
            return missing
        try:
            target = None if status == CLEAR else parse_day_status(status)
        except InvalidStatusError as exc:
            return ServiceResult.fail(
                op, "INVALID_STATUS", str(exc), allowed=[*exc.allowed, CLEAR]
            )
        try:
            when = parse_day(day)
        except ValueError:
            return ServiceResult.fail(op, "INVALID_INPUT", f"Invalid date: {day!r}")

        self._workspace.apply(
            Section.ATTENDANCE,
            lambda section: mark_attendance_day(section, code, when, target),
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "date": when.isoformat(),
                "status": target.value if target else CLEAR,
                **self._summary(code),
            },
        )

    @traced
    def cycle(self, code: str, *, day: str | None = None) -> ServiceResult:
        """Advance *day* along unmarked -> present -> absent -> holiday -> unmarked."""
        op = "cycle_attendance"
        if (missing := self._require_subject(op, code)) is not None:
            return missing
        try:
            when = parse_day(day)
        except ValueError:
            return ServiceResult.fail(op, "INVALID_INPUT", f"Invalid date: {day!r}")

        advanced: list[DayStatus | None] = []

        def _edit(section: Any) -> Any:
            updated, status = cycle_attendance_day(section, code, when)
            advanced.append(status)
            return updated

        self._workspace.apply(Section.ATTENDANCE, _edit)
        new_status = advanced[0]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "date": when.isoformat(),
                "status": new_status.value if new_status else CLEAR,
                **self._summary(code),
            },
        )
