"""Command group: previous-year question practice."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from studyctl.commands._base import StudyGroup
from studyctl.domain.filters import PyqFilter
from studyctl.domain.tags import parse_tag_list
from studyctl.services.pyq import PyqService

if TYPE_CHECKING:
    from studyctl.commands._context import AppContext

_PYQ_EXAMPLES = """\
  studyctl pyq list CS101
  studyctl pyq list CS101 --filter not-done
  studyctl pyq add CS101 "Explain paging" --year 2023 --marks 10
  studyctl pyq toggle CS101 k2x9a
  studyctl pyq stats"""


@click.group(cls=StudyGroup, examples=_PYQ_EXAMPLES)
@click.pass_obj
def pyq(app: AppContext) -> None:
    """Track previous-year questions and their practice status."""


@pyq.command(
    "list",
    examples="""\
  studyctl pyq list CS101
  studyctl pyq list CS101 --filter mastered
  studyctl pyq list CS101 --search 2022
  studyctl --json pyq list CS101 --filter not-done""",
)
@click.argument("code")
@click.option(
    "--filter",
    "status_filter",
    type=click.Choice([f.value for f in PyqFilter]),
    default=None,
    help="Status filter (default from config).",
)
@click.option("--search", "query", default="", help="Match question, year, module, or tag.")
@click.pass_obj
def list_cmd(app: AppContext, code: str, status_filter: str | None, query: str) -> None:
    """List a subject's questions."""
    app.emit(PyqService(app.workspace).list_items(code, status_filter=status_filter, query=query))


@pyq.command(
    examples="""\
  studyctl pyq add CS101 "Explain paging"
  studyctl pyq add CS101 "Deadlock conditions" --year 2022 --marks 5 --module "Unit 3"
  studyctl pyq add CS101 "Compare TCP and UDP" --tags "networks, exam" --difficulty hard"""
)
@click.argument("code")
@click.argument("question")
@click.option("--year", default="", help="Exam year.")
@click.option("--marks", default="0", help="Marks (non-numeric values count as 0).")
@click.option("--module", default="", help="Module or unit label.")
@click.option(
    "--difficulty",
    type=click.Choice(["easy", "medium", "hard"]),
    default="medium",
    help="Difficulty label.",
)
@click.option("--tags", default="", help="Comma-separated tags.")
@click.pass_obj
def add(
    app: AppContext,
    code: str,
    question: str,
    year: str,
    marks: str,
    module: str,
    difficulty: str,
    tags: str,
) -> None:
    """Add a question as not-started."""
    result = PyqService(app.workspace).add(
        code,
        question,
        year=year,
        marks=marks,
        module=module,
        difficulty=difficulty,
        tags=parse_tag_list(tags),
    )
    app.emit(result)


@pyq.command(
    examples="""\
  studyctl pyq toggle CS101 k2x9a"""
)
@click.argument("code")
@click.argument("item_id")
@click.pass_obj
def toggle(app: AppContext, code: str, item_id: str) -> None:
    """Advance a question: not-started, practiced, mastered, not-started."""
    app.emit(PyqService(app.workspace).cycle(code, item_id))


@pyq.command(
    examples="""\
  studyctl pyq delete CS101 k2x9a"""
)
@click.argument("code")
@click.argument("item_id")
@click.pass_obj
def delete(app: AppContext, code: str, item_id: str) -> None:
    """Remove a question."""
    app.emit(PyqService(app.workspace).delete(code, item_id))


@pyq.command(
    examples="""\
  studyctl pyq stats
  studyctl pyq stats CS101"""
)
@click.argument("code", required=False, default=None)
@click.pass_obj
def stats(app: AppContext, code: str | None) -> None:
    """Practice counts for one subject or all of them."""
    app.emit(PyqService(app.workspace).stats(code))
