"""Command: load seed data into the state file (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from studyctl.commands._base import StudyCommand

if TYPE_CHECKING:
    from studyctl.commands._context import AppContext

_INIT_EXAMPLES = """\
  studyctl init seed.json
  studyctl init seed.json --replace
  studyctl -c ~/semester/studyctl.toml init ~/semester/seed.json"""


@click.command("init", cls=StudyCommand, examples=_INIT_EXAMPLES)
@click.argument("seed", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--replace",
    is_flag=True,
    help="Discard saved progress instead of merging it over the seed.",
)
@click.pass_obj
def init_cmd(app: AppContext, seed: Path, replace: bool) -> None:
    """Load subjects, syllabus, and PYQs from a seed file."""
    from studyctl.services.check import CheckService

    app.emit(CheckService(app.workspace).seed(seed, replace=replace))
