"""Command group: attendance marks and threshold tracking."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from studyctl.commands._base import StudyGroup
from studyctl.domain.lifecycle import DayStatus
from studyctl.services.attendance import CLEAR, AttendanceService

if TYPE_CHECKING:
    from studyctl.commands._context import AppContext

_ATTENDANCE_EXAMPLES = """\
  studyctl attendance show
  studyctl attendance mark CS101 present
  studyctl attendance mark CS101 absent --date 2024-03-04
  studyctl attendance toggle CS101"""


@click.group(cls=StudyGroup, examples=_ATTENDANCE_EXAMPLES)
@click.pass_obj
def attendance(app: AppContext) -> None:
    """Record classes attended and see how far you are from the threshold."""


@attendance.command(
    examples="""\
  studyctl attendance show
  studyctl attendance show CS101
  studyctl --json attendance show"""
)
@click.argument("code", required=False, default=None)
@click.pass_obj
def show(app: AppContext, code: str | None) -> None:
    """Attendance percent, classes needed, and classes you can skip."""
    app.emit(AttendanceService(app.workspace).show(code))


@attendance.command(
    examples="""\
  studyctl attendance mark CS101 present
  studyctl attendance mark CS101 holiday --date 2024-03-04
  studyctl attendance mark CS101 clear --date 2024-03-04"""
)
@click.argument("code")
@click.argument("status", type=click.Choice([*(s.value for s in DayStatus), CLEAR]))
@click.option("--date", "day", default=None, help="Day to mark as YYYY-MM-DD (default today).")
@click.pass_obj
def mark(app: AppContext, code: str, status: str, day: str | None) -> None:
    """Mark a day present, absent, or holiday (or clear it)."""
    app.emit(AttendanceService(app.workspace).mark(code, status, day=day))


@attendance.command(
    examples="""\
  studyctl attendance toggle CS101
  studyctl attendance toggle CS101 --date 2024-03-04"""
)
@click.argument("code")
@click.option("--date", "day", default=None, help="Day to cycle as YYYY-MM-DD (default today).")
@click.pass_obj
def toggle(app: AppContext, code: str, day: str | None) -> None:
    """Cycle a day: unmarked, present, absent, holiday, unmarked."""
    app.emit(AttendanceService(app.workspace).cycle(code, day=day))
