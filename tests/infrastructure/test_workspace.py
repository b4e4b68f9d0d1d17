"""Tests for the Workspace commit path."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

import pytest

from studyctl.config.settings import StudySettings
from studyctl.domain.errors import InvalidSectionError
from studyctl.domain.models import Note
from studyctl.domain.state import Section, StateTree, append_item
from studyctl.infrastructure.store import JsonStore, StoreError
from studyctl.infrastructure.workspace import Workspace


class _FailingStore(JsonStore):
    def save(self, tree: StateTree) -> None:
        raise StoreError("disk full")


class TestWorkspaceLoad:
    def test_lazy_empty(self, empty_workspace: Workspace) -> None:
        assert empty_workspace.tree == StateTree()

    def test_loads_existing_file(
        self, settings: StudySettings, workspace: Workspace, sample_tree: StateTree
    ) -> None:
        fresh = Workspace(settings)
        assert fresh.tree == sample_tree

    def test_injected_tree(self, settings: StudySettings, sample_tree: StateTree) -> None:
        ws = Workspace(settings, tree=sample_tree)
        assert ws.tree is sample_tree


class TestWorkspaceCommit:
    def test_commit_replaces_section(self, workspace: Workspace) -> None:
        before = workspace.tree
        after = workspace.commit("notes", {})
        assert workspace.tree is after
        assert after.notes == {}
        assert after.syllabus is before.syllabus

    def test_commit_persists(self, settings: StudySettings, workspace: Workspace) -> None:
        workspace.commit(Section.NOTES, {})
        assert Workspace(settings).tree.notes == {}

    def test_commit_invalid_section(self, workspace: Workspace) -> None:
        before = workspace.tree
        with pytest.raises(InvalidSectionError):
            workspace.commit("grades", {})
        assert workspace.tree is before

    def test_apply_sees_latest_tree(self, workspace: Workspace) -> None:
        workspace.apply("notes", lambda s: append_item(s, "CS101", Note(id="a", title="A")))
        workspace.apply("notes", lambda s: append_item(s, "CS101", Note(id="b", title="B")))
        assert [n.id for n in workspace.tree.notes["CS101"]] == ["n1", "n2", "a", "b"]

    def test_apply_is_serialized(self, workspace: Workspace) -> None:
        def add(i: int) -> None:
            workspace.apply(
                "notes", lambda s: append_item(s, "MA201", Note(id=f"m{i}", title=str(i)))
            )

        threads = [threading.Thread(target=add, args=(i,)) for i in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(workspace.tree.notes["MA201"]) == 10

    def test_failed_save_keeps_previous_tree(
        self, settings: StudySettings, sample_tree: StateTree, tmp_path: Path
    ) -> None:
        ws = Workspace(settings, store=_FailingStore(tmp_path / "x.json"), tree=sample_tree)
        with pytest.raises(StoreError):
            ws.commit("notes", {})
        assert ws.tree is sample_tree

    def test_no_autosave(self, tmp_path: Path, sample_tree: StateTree) -> None:
        (tmp_path / "studyctl.toml").write_text("[store]\nautosave = false\n")
        settings = StudySettings.from_cli(workspace_root=tmp_path)
        ws = Workspace(settings, tree=sample_tree)
        ws.commit("notes", {})
        assert not ws.store.exists()
        ws.save()
        assert ws.store.exists()

    def test_commit_logs(self, workspace: Workspace, monkeypatch: pytest.MonkeyPatch) -> None:
        events: list[tuple[str, dict[str, Any]]] = []

        class _Recorder:
            def debug(self, event: str, **kw: Any) -> None:
                events.append((event, kw))

        monkeypatch.setattr("studyctl.infrastructure.workspace.log", _Recorder())
        workspace.commit("pyq", {})
        assert events == [("state.commit", {"section": "pyq", "path": str(workspace.store.path)})]
