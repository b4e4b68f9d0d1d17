"""BaseService — shared foundation for all studyctl services.

Every service receives a :class:`Workspace` at construction time. Reads
go through ``self._workspace.tree`` on every call, so results always
reflect the latest commit. Writes go through ``self._workspace.apply``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from studyctl.domain.checks import find_malformed
from studyctl.services.result import ServiceResult

if TYPE_CHECKING:
    from studyctl.domain.state import StateTree
    from studyctl.infrastructure.workspace import Workspace

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class NotesService(BaseService):
            def add(self, code: str, title: str) -> ServiceResult:
                if (missing := self._require_subject("add_note", code)) is not None:
                    return missing
                self._workspace.apply("notes", lambda notes: ...)
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    @property
    def _tree(self) -> StateTree:
        return self._workspace.tree

    def _require_subject(self, op: str, code: str) -> ServiceResult | None:
        """Return a failed result if *code* is not a known subject."""
        if code in self._tree.subjects:
            return None
        return ServiceResult.fail(
            op,
            "UNKNOWN_SUBJECT",
            f"No subject with code: {code}",
            known=sorted(self._tree.subjects),
        )

    def _malformed_warnings(
        self, *, subject: str | None = None, entity: str | None = None
    ) -> list[str]:
        """Messages for records read with a defaulted field."""
        found = find_malformed(self._tree)
        if subject is not None:
            found = [w for w in found if w.path.startswith(f"{subject}/")]
        if entity is not None:
            found = [w for w in found if w.entity == entity]
        for warning in found:
            logger.debug("Malformed entity: %s", warning)
        return [str(w) for w in found]
