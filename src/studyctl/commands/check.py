"""Command: report records with unrecognized statuses."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from studyctl.commands._base import StudyCommand

if TYPE_CHECKING:
    from studyctl.commands._context import AppContext


@click.command(
    cls=StudyCommand,
    examples="""\
  studyctl check
  studyctl --json check""",
)
@click.pass_obj
def check(app: AppContext) -> None:
    """List topics and PYQs whose stored status is not recognized."""
    from studyctl.services.check import CheckService

    app.emit(CheckService(app.workspace).check())
