"""Tests for the pyq command group."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from studyctl.cli import cli


def _data(result) -> dict:
    return json.loads(result.stdout)["data"]


def _saved_pyqs(tmp_path: Path) -> list[dict]:
    return json.loads((tmp_path / "studyctl.json").read_text(encoding="utf-8"))["pyq"]["CS101"]


@pytest.mark.usefixtures("_isolated_workspace")
class TestPyqList:
    def test_list_all(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "pyq", "list", "CS101"])
        assert result.exit_code == 0
        data = _data(result)
        assert data["filter"] == "all"
        assert [i["id"] for i in data["items"]] == ["q1", "q2", "q3", "q4"]

    def test_legacy_status_reads_as_not_started(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "pyq", "list", "CS101"])
        assert _data(result)["items"][3]["status"] == "not-started"

    @pytest.mark.parametrize(
        "key,expected",
        [
            ("not-done", ["q1", "q4"]),
            ("practiced", ["q2"]),
            ("mastered", ["q3"]),
        ],
    )
    def test_filter(self, cli_runner: CliRunner, key: str, expected: list[str]) -> None:
        result = cli_runner.invoke(cli, ["--json", "pyq", "list", "CS101", "--filter", key])
        assert result.exit_code == 0
        assert [i["id"] for i in _data(result)["items"]] == expected

    def test_search(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "pyq", "list", "CS101", "--search", "2022"])
        assert result.exit_code == 0
        assert [i["id"] for i in _data(result)["items"]] == ["q2", "q4"]

    def test_filter_and_search(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "pyq", "list", "CS101", "--filter", "not-done", "--search", "page"]
        )
        assert result.exit_code == 0
        assert [i["id"] for i in _data(result)["items"]] == ["q4"]

    def test_unknown_filter_is_usage_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["pyq", "list", "CS101", "--filter", "bogus"])
        assert result.exit_code == 2

    def test_quiet_lists_ids(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "pyq", "list", "CS101", "--filter", "not-done"])
        assert result.exit_code == 0
        assert result.stdout.split() == ["q1", "q4"]

    def test_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["pyq", "list", "CS101"])
        assert result.exit_code == 0
        assert "4 question(s)" in result.stdout
        assert "filter=all" in result.stdout

    def test_verbose_filter_span(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "-v", "pyq", "list", "CS101", "--filter", "not-done"]
        )
        assert result.exit_code == 0
        [span] = json.loads(result.stdout)["meta"]["telemetry"]["children"]
        assert span["name"] == "filter"
        assert span["annotations"] == {"matched": 2}

    def test_default_filter_from_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "studyctl.toml").write_text('[pyq]\ndefault_filter = "mastered"\n')
        result = cli_runner.invoke(cli, ["--json", "pyq", "list", "CS101"])
        assert result.exit_code == 0
        assert [i["id"] for i in _data(result)["items"]] == ["q3"]


@pytest.mark.usefixtures("_isolated_workspace")
class TestPyqEdits:
    def test_add(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(
            cli,
            [
                "--json",
                "pyq",
                "add",
                "CS101",
                "Compare TCP and UDP",
                "--year",
                "2020",
                "--marks",
                "5",
                "--tags",
                "networks, exam",
                "--difficulty",
                "hard",
            ],
        )
        assert result.exit_code == 0
        data = _data(result)
        assert data["status"] == "not-started"
        assert data["marks"] == 5
        assert data["tags"] == ["networks", "exam"]
        saved = _saved_pyqs(tmp_path)
        assert len(saved) == 5
        assert saved[-1]["id"] == data["id"]

    def test_add_non_numeric_marks(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "pyq", "add", "CS101", "Q", "--marks", "ten"])
        assert result.exit_code == 0
        assert _data(result)["marks"] == 0

    def test_add_blank_question(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "pyq", "add", "CS101", "   "])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "INVALID_INPUT"

    def test_add_unknown_subject(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "pyq", "add", "XX000", "Q"])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "UNKNOWN_SUBJECT"
        assert len(_saved_pyqs(tmp_path)) == 4

    def test_toggle_cycle(self, cli_runner: CliRunner) -> None:
        seen = []
        for _ in range(3):
            result = cli_runner.invoke(cli, ["--json", "pyq", "toggle", "CS101", "q1"])
            assert result.exit_code == 0
            seen.append(_data(result)["status"])
        assert seen == ["practiced", "mastered", "not-started"]

    def test_toggle_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "pyq", "toggle", "CS101", "nope"])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "NOT_FOUND"

    def test_delete(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["pyq", "delete", "CS101", "q2"])
        assert result.exit_code == 0
        assert [q["id"] for q in _saved_pyqs(tmp_path)] == ["q1", "q3", "q4"]

    def test_delete_quiet_prints_id(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "pyq", "delete", "CS101", "q2"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "q2"

    def test_delete_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["pyq", "delete", "CS101", "nope"])
        assert result.exit_code == 1


@pytest.mark.usefixtures("_isolated_workspace")
class TestPyqStats:
    def test_stats_one_subject(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "pyq", "stats", "CS101"])
        assert result.exit_code == 0
        [row] = _data(result)["items"]
        assert row["total"] == 4
        assert row["mastered"] == 1
        assert row["practiced"] == 1
        assert row["not_done"] == 2

    def test_stats_every_subject(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "pyq", "stats"])
        assert result.exit_code == 0
        totals = {i["subject"]: i["total"] for i in _data(result)["items"]}
        assert totals == {"CS101": 4, "MA201": 0}
