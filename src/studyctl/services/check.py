"""CheckService — integrity report and seeding."""

from __future__ import annotations

from pathlib import Path

from studyctl.domain.checks import find_malformed
from studyctl.domain.state import Section
from studyctl.infrastructure.store import StoreError, load_seed, merge_seed
from studyctl.services.base import BaseService
from studyctl.services.result import ServiceResult
from studyctl.services.telemetry import traced


class CheckService(BaseService):
    """Report malformed records and load seed data."""

    @traced
    def check(self) -> ServiceResult:
        """List every record read with a defaulted field. Never fails."""
        issues = [
            {"entity": w.entity, "path": w.path, "field": w.field, "value": w.value}
            for w in find_malformed(self._tree)
        ]
        return ServiceResult(
            ok=True,
            op="check",
            data={"issues": issues, "count": len(issues), "healthy": not issues},
        )

    @traced
    def seed(self, path: Path, *, replace: bool = False) -> ServiceResult:
        """Load a seed file, merging with saved state unless *replace*."""
        op = "seed"
        try:
            seed_tree = load_seed(path)
        except StoreError as exc:
            return ServiceResult.fail(op, "STORE_ERROR", str(exc), path=str(path))

        tree = seed_tree if replace else merge_seed(seed_tree, self._tree)
        try:
            self._workspace.replace(tree)
        except StoreError as exc:
            return ServiceResult.fail(op, "STORE_ERROR", str(exc))
        counts = {section.value: len(tree.section(section)) for section in Section}
        return ServiceResult(
            ok=True,
            op=op,
            data={"path": str(self._workspace.store.path), "replaced": replace, **counts},
            warnings=[str(w) for w in find_malformed(tree)],
        )
