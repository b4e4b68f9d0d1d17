"""Command group: overall progress, weak areas, and revision planning."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from studyctl.commands._base import StudyGroup
from studyctl.domain.revision import MAX_PLAN_DAYS
from studyctl.services.progress import ProgressService

if TYPE_CHECKING:
    from studyctl.commands._context import AppContext

_PROGRESS_EXAMPLES = """\
  studyctl progress overview
  studyctl progress weak
  studyctl progress plan --days 5"""


@click.group(cls=StudyGroup, examples=_PROGRESS_EXAMPLES)
@click.pass_obj
def progress(app: AppContext) -> None:
    """Dashboard figures across every subject."""


@progress.command(
    examples="""\
  studyctl progress overview
  studyctl --json progress overview"""
)
@click.pass_obj
def overview(app: AppContext) -> None:
    """Overall syllabus percent with per-subject syllabus, PYQ, and attendance figures."""
    app.emit(ProgressService(app.workspace).overview())


@progress.command(
    examples="""\
  studyctl progress weak
  studyctl -q progress weak"""
)
@click.pass_obj
def weak(app: AppContext) -> None:
    """Incomplete topics and unmastered PYQs."""
    app.emit(ProgressService(app.workspace).weak_areas())


@progress.command(
    examples="""\
  studyctl progress plan
  studyctl progress plan --days 3"""
)
@click.option(
    "--days",
    type=click.IntRange(1, MAX_PLAN_DAYS),
    default=None,
    help="Days to plan over (default from config).",
)
@click.pass_obj
def plan(app: AppContext, days: int | None) -> None:
    """Spread weak areas over a number of revision days."""
    app.emit(ProgressService(app.workspace).plan(days))
