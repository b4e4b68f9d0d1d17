"""Workspace — owner of the current StateTree and its commit path.

The Workspace is the single dependency injected into every service. It
holds exactly one current tree. Commits are serialized: each one derives
the new section value from the most recently committed tree, swaps the
tree reference, and hands the whole tree to the Store.

Trees are never mutated in place, so a reader that captured an earlier
tree keeps a consistent (if stale) view.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

import structlog

from studyctl.domain.state import StateTree, update_section
from studyctl.infrastructure.store import JsonStore

if TYPE_CHECKING:
    from studyctl.config.settings import StudySettings

log = structlog.get_logger(__name__)

SectionEdit = Callable[[Mapping[str, Any]], Mapping[str, Any]]


class Workspace:
    """Current-tree holder with sequential, store-backed commits."""

    def __init__(
        self,
        settings: StudySettings,
        *,
        store: JsonStore | None = None,
        tree: StateTree | None = None,
    ) -> None:
        self.settings = settings
        self.store = store if store is not None else JsonStore(settings.store_path)
        self._tree = tree
        self._lock = threading.RLock()

    @property
    def tree(self) -> StateTree:
        """The most recently committed tree (loaded lazily on first access)."""
        with self._lock:
            if self._tree is None:
                self._tree = self.store.load()
            return self._tree

    def commit(self, section: str, value: Mapping[str, Any]) -> StateTree:
        """Replace one section and publish the resulting tree."""
        with self._lock:
            new_tree = update_section(self.tree, section, value)
            self._publish(new_tree, section)
            return new_tree

    def apply(self, section: str, edit: SectionEdit) -> StateTree:
        """Commit ``edit(current_section_value)`` for *section*.

        *edit* always receives the section from the latest tree, so
        back-to-back edits never lose each other's effect.
        """
        with self._lock:
            current = self.tree.section(section)
            return self.commit(section, edit(current))

    def replace(self, tree: StateTree) -> StateTree:
        """Publish a whole new tree (used by seeding)."""
        with self._lock:
            self._publish(tree, "*")
            return tree

    def save(self) -> None:
        self.store.save(self.tree)

    def _publish(self, tree: StateTree, section: str) -> None:
        # A failed save leaves the previous tree current.
        if self.settings.store.autosave:
            self.store.save(tree)
        self._tree = tree
        log.debug("state.commit", section=section, path=str(self.store.path))
