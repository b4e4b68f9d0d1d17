"""Subcommand modules for studyctl.

Provides register_commands() which uses deferred imports to keep
``studyctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group.

    5 groups (have subcommands) + 2 standalone commands.
    """
    # --- Groups ---
    from studyctl.commands.attendance import attendance
    from studyctl.commands.notes import notes
    from studyctl.commands.progress import progress
    from studyctl.commands.pyq import pyq
    from studyctl.commands.syllabus import syllabus

    cli.add_command(syllabus)
    cli.add_command(pyq)
    cli.add_command(notes)
    cli.add_command(attendance)
    cli.add_command(progress)

    # --- Standalone commands ---
    from studyctl.commands.check import check
    from studyctl.commands.init_cmd import init_cmd

    cli.add_command(init_cmd)
    cli.add_command(check)
