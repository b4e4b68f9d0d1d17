"""Shared pytest fixtures for studyctl tests."""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from studyctl.config.logging import logger_levels
from studyctl.config.settings import StudySettings
from studyctl.domain.state import StateTree
from studyctl.infrastructure.workspace import Workspace
from studyctl.services.telemetry import disable_telemetry

# Two subjects. CS101 has a partly done syllabus, four PYQs (one stored with
# the legacy "not-done" status), two notes, and 3/4 attendance. MA201 has a
# single untouched topic and nothing else.
SAMPLE_STATE: dict[str, Any] = {
    "subjects": {
        "CS101": {
            "code": "CS101",
            "name": "Operating Systems",
            "shortName": "OS",
            "color": "#3366ff",
            "credits": 4,
        },
        "MA201": {"code": "MA201", "name": "Linear Algebra", "shortName": "LA", "credits": 3},
    },
    "syllabus": {
        "CS101": {
            "Unit 1": {
                "title": "Processes",
                "topics": [
                    {"id": "t1", "name": "Process states", "status": "completed"},
                    {"id": "t2", "name": "Scheduling", "status": "in-progress"},
                    {"id": "t3", "name": "Threads", "status": "not-started"},
                ],
            },
        },
        "MA201": {
            "Unit 1": {
                "title": "Vectors",
                "topics": [{"id": "v1", "name": "Span", "status": "not-started"}],
            },
        },
    },
    "pyq": {
        "CS101": [
            {
                "id": "q1",
                "question": "Explain paging",
                "year": "2023",
                "marks": 10,
                "status": "not-started",
            },
            {
                "id": "q2",
                "question": "Deadlock conditions",
                "year": "2022",
                "marks": "5",
                "module": "Unit 3",
                "status": "practiced",
            },
            {
                "id": "q3",
                "question": "Semaphores",
                "year": "2021",
                "tags": ["exam"],
                "status": "mastered",
            },
            {"id": "q4", "question": "Page replacement", "year": "2022", "status": "not-done"},
        ],
    },
    "notes": {
        "CS101": [
            {
                "id": "n1",
                "title": "Exam tips",
                "content": "Revise paging first",
                "tags": ["exam"],
                "date": "2024-03-01",
            },
            {
                "id": "n2",
                "title": "Threads",
                "content": "User vs kernel threads",
                "date": "2024-03-02",
            },
        ],
    },
    "attendance": {"CS101": {"total": 4, "attended": 3}},
}


def sample_state() -> dict[str, Any]:
    """A fresh deep copy of the sample state document."""
    return copy.deepcopy(SAMPLE_STATE)


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """CLI runs with -v enable telemetry in the test thread; switch it back off."""
    yield
    disable_telemetry()


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None]:
    """Drop handlers a CLI run bound to the runner's (now closed) stderr."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    for name in logger_levels(verbose=False):
        logging.getLogger(name).setLevel(logging.NOTSET)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def sample_data() -> dict[str, Any]:
    """The sample state as a raw JSON-shaped dict."""
    return sample_state()


@pytest.fixture
def sample_tree() -> StateTree:
    """The sample state as a validated tree."""
    return StateTree.model_validate(sample_state())


@pytest.fixture
def settings(tmp_path: Path) -> StudySettings:
    """Default settings rooted at a temp directory."""
    return StudySettings.from_cli(workspace_root=tmp_path)


@pytest.fixture
def workspace(settings: StudySettings, sample_tree: StateTree) -> Workspace:
    """Workspace on a temp state file, preloaded with the sample tree."""
    ws = Workspace(settings)
    ws.replace(sample_tree)
    return ws


@pytest.fixture
def empty_workspace(settings: StudySettings) -> Workspace:
    """Workspace on a temp directory with no state file."""
    return Workspace(settings)


@pytest.fixture
def _isolated_workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory holding the sample state file.

    Use via ``@pytest.mark.usefixtures("_isolated_workspace")`` on command test
    classes. Tests that need the path can also request ``tmp_path`` directly
    (pytest deduplicates; it's the same directory).
    """
    monkeypatch.delenv("STUDYCTL_CONFIG", raising=False)
    (tmp_path / "studyctl.json").write_text(json.dumps(sample_state()), encoding="utf-8")
    monkeypatch.chdir(tmp_path)
