"""Rich Console factory and theme for studyctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

STUDY_THEME = Theme(
    {
        "study.ok": "bold green",
        "study.error": "bold red",
        "study.warning": "bold yellow",
        "study.op": "bold cyan",
        "study.key": "dim",
        "study.id": "bold blue",
        "study.title": "bold",
        "study.percent": "magenta",
        "study.status.done": "green",
        "study.status.partial": "yellow",
        "study.status.todo": "dim",
    }
)

_STATUS_STYLES: dict[str, str] = {
    "completed": "study.status.done",
    "mastered": "study.status.done",
    "present": "study.status.done",
    "in-progress": "study.status.partial",
    "practiced": "study.status.partial",
    "holiday": "study.status.partial",
    "not-started": "study.status.todo",
    "absent": "study.error",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=STUDY_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Return the Rich style name for a topic, PYQ, or attendance status."""
    return _STATUS_STYLES.get(status, "")
