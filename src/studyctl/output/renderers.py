"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from studyctl.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from studyctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        ids = [_extract_id(item) for item in items]
        return "\n".join(i for i in ids if i)
    if "id" in result.data:
        return str(result.data["id"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _extract_id(item: Any) -> str:
    if isinstance(item, dict):
        for key in ("id", "subject", "code"):
            val = item.get(key)
            if val is not None:
                return str(val)
    return ""


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="study.ok")
    op = Text(f"  {result.op}", style="study.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}:", style="study.key")
    if key == "id":
        v = Text(str(value), style="study.id")
    elif key in ("title", "question"):
        v = Text(str(value), style="study.title")
    elif key == "status":
        v = Text(str(value), style=style_for_status(str(value)))
    elif key.endswith("percent"):
        v = Text(f"{value}%", style="study.percent")
    elif isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _status_text(status: str) -> Text:
    return Text(status, style=style_for_status(status))


def _percent_bar(percent: int, *, width: int = 24) -> Table:
    grid = Table.grid(padding=(0, 1))
    grid.add_row(
        ProgressBar(total=100, completed=percent, width=width),
        Text(f"{percent}%", style="study.percent"),
    )
    return grid


# ── Error / generic ───────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="study.error")
    op = Text(f"  {result.op}", style="study.op")
    console.print(label, op, Text(" — "), Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    telemetry = result.meta.get("telemetry")
    if telemetry:
        _render_span(console, telemetry, indent=4)
    for k, v in result.meta.items():
        if k != "telemetry":
            console.print(Text(f"    {k}: {v}"))


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    prefix = " " * indent
    console.print(f"{prefix}[dim]{span.get('duration_ms', 0.0):>8.2f}ms[/dim]  {span.get('name')}")
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_MUTATION_KEYS = (
    "subject",
    "unit",
    "id",
    "title",
    "question",
    "date",
    "status",
    "percent",
    "classes_needed",
    "can_skip",
)


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render add/delete/cycle/set/mark results."""
    _status_line(console, result)
    for key in _MUTATION_KEYS:
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


# ── Syllabus ──────────────────────────────────────────────────────────


def _render_syllabus(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    console.print(Text(f"{d['subject']}  syllabus", style="study.title"))
    console.print(_percent_bar(d["percent"]))
    console.print(
        f"  {d['completed_topics']} completed, {d['in_progress_topics']} in progress, "
        f"{d['remaining']} remaining of {d['total_topics']}"
    )
    for unit in d["units"]:
        heading = f"{unit['unit']} — {unit['title']}" if unit["title"] else unit["unit"]
        table = Table(
            title=Text(f"{heading} ({unit['completed']}/{unit['total']} done)"),
            title_justify="left",
            show_header=True,
            pad_edge=False,
        )
        table.add_column("ID", style="study.id", no_wrap=True)
        table.add_column("Topic")
        table.add_column("Status")
        for topic in unit["topics"]:
            table.add_row(topic["id"], Text(topic["name"]), _status_text(topic["status"]))
        console.print()
        console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_syllabus_progress(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    table = Table(show_header=True, pad_edge=False)
    table.add_column("Subject", style="study.id", no_wrap=True)
    table.add_column("Name")
    table.add_column("Done", justify="right")
    table.add_column("In progress", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Progress")
    for item in result.data["items"]:
        table.add_row(
            item["subject"],
            Text(item["name"]),
            str(item["completed_topics"]),
            str(item["in_progress_topics"]),
            str(item["total_topics"]),
            _percent_bar(item["percent"], width=16),
        )
    console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_subjects(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = Table(show_header=True, pad_edge=False)
    table.add_column("Code", style="study.id", no_wrap=True)
    table.add_column("Name", style="study.title")
    table.add_column("Short")
    table.add_column("Credits", justify="right")
    for item in result.data["items"]:
        table.add_row(
            item["code"], Text(item["name"]), Text(item["short_name"]), str(item["credits"])
        )
    console.print(table)


# ── PYQ ───────────────────────────────────────────────────────────────


def _render_pyqs(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    console.print(Text(f"{d['subject']}  {d['count']} question(s)  filter={d['filter']}"))
    if not d["items"]:
        return
    table = Table(show_header=True, pad_edge=False)
    table.add_column("ID", style="study.id", no_wrap=True)
    table.add_column("Question")
    table.add_column("Year")
    table.add_column("Marks", justify="right")
    if verbose:
        table.add_column("Module")
        table.add_column("Difficulty")
        table.add_column("Tags")
    table.add_column("Status")
    for item in d["items"]:
        row: list[Any] = [item["id"], Text(item["question"]), item["year"], str(item["marks"])]
        if verbose:
            row.extend([Text(item["module"]), item["difficulty"], Text(", ".join(item["tags"]))])
        row.append(_status_text(item["status"]))
        table.add_row(*row)
    console.print(table)


def _render_pyq_stats(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = Table(show_header=True, pad_edge=False)
    table.add_column("Subject", style="study.id", no_wrap=True)
    table.add_column("Mastered", justify="right")
    table.add_column("Practiced", justify="right")
    table.add_column("Not done", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Mastery")
    for item in result.data["items"]:
        table.add_row(
            item["subject"],
            str(item["mastered"]),
            str(item["practiced"]),
            str(item["not_done"]),
            str(item["total"]),
            _percent_bar(item["mastery_percent"], width=16),
        )
    console.print(table)


# ── Notes ─────────────────────────────────────────────────────────────


def _render_notes(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    label = f"{d['count']} note(s)"
    if d.get("query"):
        label += f" matching {d['query']!r}"
    console.print(Text(label))
    for note in d["items"]:
        console.print()
        header = Text()
        header.append(note["id"], style="study.id")
        header.append(f"  [{note['subject']}]  ")
        header.append(note["title"], style="study.title")
        if note["date"]:
            header.append(f"  {note['date']}", style="dim")
        console.print(header)
        if note["tags"]:
            console.print(Text("  tags: " + ", ".join(note["tags"]), style="study.key"))
        if verbose:
            console.print(Text(note["content"]))


# ── Attendance ────────────────────────────────────────────────────────


def _render_attendance(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = Table(show_header=True, pad_edge=False)
    table.add_column("Subject", style="study.id", no_wrap=True)
    table.add_column("Attended", justify="right")
    table.add_column("Attendance")
    table.add_column("Need", justify="right")
    table.add_column("Can skip", justify="right")
    for item in result.data["items"]:
        table.add_row(
            item["subject"],
            f"{item['attended']}/{item['total']}",
            _percent_bar(item["percent"], width=16),
            str(item["classes_needed"]),
            str(item["can_skip"]),
        )
    console.print(table)


# ── Progress ──────────────────────────────────────────────────────────


def _render_overview(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    console.print(Text("Overall syllabus progress", style="study.title"))
    console.print(_percent_bar(d["overall_percent"]))
    table = Table(show_header=True, pad_edge=False)
    table.add_column("Subject", style="study.id", no_wrap=True)
    table.add_column("Name")
    table.add_column("Syllabus")
    table.add_column("PYQ mastered", justify="right")
    table.add_column("Attendance", justify="right")
    table.add_column("Notes", justify="right")
    for item in d["items"]:
        table.add_row(
            item["subject"],
            Text(item["name"]),
            _percent_bar(item["syllabus_percent"], width=16),
            f"{item['pyq_mastered']}/{item['pyq_total']}",
            f"{item['attendance_percent']}%",
            str(item["notes"]),
        )
    console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_weak_areas(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    console.print(Text(f"{d['topic_count']} incomplete topic(s)", style="study.title"))
    for t in d["topics"]:
        line = Text(f"  {t['subject']} / {t['unit']}: {t['topic']} ")
        console.print(line, _status_text(t["status"]))
    console.print(Text(f"{d['pyq_count']} unmastered PYQ(s)", style="study.title"))
    for q in d["pyqs"]:
        year = f" ({q['year']})" if q["year"] else ""
        line = Text(f"  {q['subject']}: {q['question']}{year} ")
        console.print(line, _status_text(q["status"]))


def _render_plan(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    for day in result.data["plan"]:
        console.print(Text(f"Day {day['day']}", style="study.title"))
        if not day["topics"] and not day["pyqs"]:
            console.print(Text("  Revision / buffer", style="dim"))
            continue
        for t in day["topics"]:
            console.print(Text(f"  topic  {t['subject']} / {t['unit']}: {t['topic']}"))
        if day["pyqs"]:
            subjects = ", ".join(dict.fromkeys(q["subject"] for q in day["pyqs"]))
            console.print(Text(f"  pyq    practice {len(day['pyqs'])} question(s) from {subjects}"))


# ── Check ─────────────────────────────────────────────────────────────


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    if d["healthy"]:
        console.print(Text("OK", style="study.ok"), Text("  no malformed records"))
        return
    console.print(Text(f"{d['count']} record(s) with a defaulted field", style="study.warning"))
    for issue in d["issues"]:
        line = f"  {issue['entity']:<6} {issue['path']}  {issue['field']}={issue['value']!r}"
        console.print(Text(line))


_OP_RENDERERS: dict[str, Any] = {
    # Syllabus
    "syllabus_show": _render_syllabus,
    "syllabus_progress": _render_syllabus_progress,
    "list_subjects": _render_subjects,
    "cycle_topic": _render_mutation,
    "set_topic_status": _render_mutation,
    # PYQ
    "list_pyqs": _render_pyqs,
    "pyq_stats": _render_pyq_stats,
    "add_pyq": _render_mutation,
    "delete_pyq": _render_mutation,
    "cycle_pyq": _render_mutation,
    # Notes
    "search_notes": _render_notes,
    "add_note": _render_mutation,
    "delete_note": _render_mutation,
    # Attendance
    "attendance_show": _render_attendance,
    "mark_attendance": _render_mutation,
    "cycle_attendance": _render_mutation,
    # Progress
    "overview": _render_overview,
    "weak_areas": _render_weak_areas,
    "revision_plan": _render_plan,
    # Check
    "check": _render_check,
}
