"""JSON-file Store for the whole state tree.

The store loads and saves the complete tree; it knows nothing about
individual sections. A missing file loads as an empty tree. Writes go to
a sibling temp file first and are moved into place, so a failed save
never leaves a half-written state file behind.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from studyctl.domain.models import PyqItem
from studyctl.domain.state import Section, StateTree

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the state file cannot be read, parsed, or written."""


class JsonStore:
    """Load/save a :class:`StateTree` as one JSON document."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> StateTree:
        """Read the tree from disk; an absent file yields an empty tree."""
        if not self.path.is_file():
            logger.debug("No state file at %s, starting empty", self.path)
            return StateTree()
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            msg = f"Cannot read state file {self.path}: {exc}"
            raise StoreError(msg) from exc
        if not raw.strip():
            return StateTree()
        return parse_tree(raw, source=str(self.path))

    def save(self, tree: StateTree) -> None:
        """Atomically replace the state file with *tree*."""
        payload = tree.model_dump_json(by_alias=True, indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                    fh.write("\n")
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            msg = f"Cannot write state file {self.path}: {exc}"
            raise StoreError(msg) from exc
        logger.debug("Saved state to %s", self.path)


def parse_tree(raw: str, *, source: str = "<string>") -> StateTree:
    """Parse JSON text into a tree, wrapping decode and shape errors."""
    try:
        data: Any = json.loads(raw)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in {source}: {exc}"
        raise StoreError(msg) from exc
    try:
        return StateTree.model_validate(data)
    except ValidationError as exc:
        msg = f"Invalid state data in {source}: {exc.error_count()} error(s)\n{exc}"
        raise StoreError(msg) from exc


def load_seed(path: Path) -> StateTree:
    """Read a seed file (same shape as the state file)."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read seed file {path}: {exc}"
        raise StoreError(msg) from exc
    return parse_tree(raw, source=str(path))


def merge_seed(seed: StateTree, saved: StateTree) -> StateTree:
    """Combine a seed tree with previously saved state.

    Non-empty saved sections win over the seed. PYQs merge per question:
    seed questions take the saved status of the same id, and questions or
    subjects that exist only in the saved data are kept after them.
    """
    merged: dict[str, Any] = {}
    for section in Section:
        saved_value = saved.section(section)
        merged[section.value] = saved_value if saved_value else seed.section(section)
    merged[Section.PYQ.value] = _merge_pyq(seed.pyq, saved.pyq)
    return StateTree.model_construct(**merged)


def _merge_pyq(
    seed: dict[str, tuple[PyqItem, ...]],
    saved: dict[str, tuple[PyqItem, ...]],
) -> dict[str, tuple[PyqItem, ...]]:
    result: dict[str, tuple[PyqItem, ...]] = {}
    for code, questions in seed.items():
        saved_items = saved.get(code, ())
        by_id = {item.id: item for item in saved_items}
        restored = tuple(
            q.model_copy(update={"status": by_id[q.id].status}) if q.id in by_id else q
            for q in questions
        )
        seed_ids = {q.id for q in questions}
        extra = tuple(item for item in saved_items if item.id not in seed_ids)
        result[code] = restored + extra
    for code, saved_items in saved.items():
        if code not in result:
            result[code] = saved_items
    return result
