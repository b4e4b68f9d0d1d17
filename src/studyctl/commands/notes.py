"""Command group: per-subject notes."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from studyctl.commands._base import StudyGroup
from studyctl.domain.tags import parse_tag_list
from studyctl.services.notes import NotesService

if TYPE_CHECKING:
    from studyctl.commands._context import AppContext

_NOTES_EXAMPLES = """\
  studyctl notes list CS101
  studyctl notes add CS101 "Paging" "Fixed-size frames; no external fragmentation"
  studyctl notes search exam
  studyctl notes delete CS101 k2x9a"""


@click.group(cls=StudyGroup, examples=_NOTES_EXAMPLES)
@click.pass_obj
def notes(app: AppContext) -> None:
    """Write, list, and search notes."""


@notes.command(
    "list",
    examples="""\
  studyctl notes list CS101
  studyctl --json notes list CS101""",
)
@click.argument("code")
@click.pass_obj
def list_cmd(app: AppContext, code: str) -> None:
    """List every note of a subject."""
    app.emit(NotesService(app.workspace).search("", code=code))


@notes.command(
    examples="""\
  studyctl notes add CS101 "Paging" "Fixed-size frames"
  studyctl notes add CS101 "Exam tips" "Revise unit 3 first" --tags exam,revision"""
)
@click.argument("code")
@click.argument("title")
@click.argument("content")
@click.option("--tags", default="", help="Comma-separated tags.")
@click.pass_obj
def add(app: AppContext, code: str, title: str, content: str, tags: str) -> None:
    """Add a note dated today."""
    app.emit(NotesService(app.workspace).add(code, title, content, tags=parse_tag_list(tags)))


@notes.command(
    examples="""\
  studyctl notes delete CS101 k2x9a"""
)
@click.argument("code")
@click.argument("note_id")
@click.pass_obj
def delete(app: AppContext, code: str, note_id: str) -> None:
    """Remove a note."""
    app.emit(NotesService(app.workspace).delete(code, note_id))


@notes.command(
    examples="""\
  studyctl notes search exam
  studyctl notes search paging --subject CS101
  studyctl --json notes search revision"""
)
@click.argument("query", required=False, default="")
@click.option("--subject", "code", default=None, help="Limit the search to one subject.")
@click.pass_obj
def search(app: AppContext, query: str, code: str | None) -> None:
    """Case-insensitive search over note titles, content, and tags."""
    app.emit(NotesService(app.workspace).search(query, code=code))
