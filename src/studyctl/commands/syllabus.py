"""Command group: syllabus browsing and topic status changes."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from studyctl.commands._base import StudyGroup
from studyctl.domain.lifecycle import TopicStatus
from studyctl.services.syllabus import SyllabusService

if TYPE_CHECKING:
    from studyctl.commands._context import AppContext

_SYLLABUS_EXAMPLES = """\
  studyctl syllabus subjects
  studyctl syllabus show CS101
  studyctl syllabus progress
  studyctl syllabus toggle CS101 "Unit 1" t1
  studyctl syllabus set CS101 "Unit 1" t1 completed"""


@click.group(cls=StudyGroup, examples=_SYLLABUS_EXAMPLES)
@click.pass_obj
def syllabus(app: AppContext) -> None:
    """Browse units and topics and track their status."""


@syllabus.command(
    examples="""\
  studyctl syllabus subjects
  studyctl syllabus subjects data
  studyctl --json syllabus subjects CS"""
)
@click.argument("query", required=False, default="")
@click.pass_obj
def subjects(app: AppContext, query: str) -> None:
    """List subjects, optionally matching a code or name."""
    app.emit(SyllabusService(app.workspace).subjects(query))


@syllabus.command(
    examples="""\
  studyctl syllabus show CS101
  studyctl --json syllabus show CS101"""
)
@click.argument("code")
@click.pass_obj
def show(app: AppContext, code: str) -> None:
    """Show every unit and topic of a subject with progress."""
    app.emit(SyllabusService(app.workspace).show(code))


@syllabus.command(
    examples="""\
  studyctl syllabus progress
  studyctl syllabus progress CS101"""
)
@click.argument("code", required=False, default=None)
@click.pass_obj
def progress(app: AppContext, code: str | None) -> None:
    """Completion figures for one subject or all of them."""
    app.emit(SyllabusService(app.workspace).progress(code))


@syllabus.command(
    examples="""\
  studyctl syllabus toggle CS101 "Unit 1" t1"""
)
@click.argument("code")
@click.argument("unit")
@click.argument("topic_id")
@click.pass_obj
def toggle(app: AppContext, code: str, unit: str, topic_id: str) -> None:
    """Advance a topic: not-started, in-progress, completed, not-started."""
    app.emit(SyllabusService(app.workspace).cycle(code, unit, topic_id))


@syllabus.command(
    "set",
    examples="""\
  studyctl syllabus set CS101 "Unit 1" t1 in-progress
  studyctl syllabus set CS101 "Unit 1" t1 not-started""",
)
@click.argument("code")
@click.argument("unit")
@click.argument("topic_id")
@click.argument("status", type=click.Choice([s.value for s in TopicStatus]))
@click.pass_obj
def set_status(app: AppContext, code: str, unit: str, topic_id: str, status: str) -> None:
    """Set a topic's status directly."""
    app.emit(SyllabusService(app.workspace).set_status(code, unit, topic_id, status))
