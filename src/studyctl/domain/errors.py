"""Error taxonomy for the domain layer.

Exceptions signal contract violations on malformed calls. Malformed
*data* is never an exception: it is recovered locally by defaulting and
reported as a :class:`MalformedEntityWarning` value.
"""

from __future__ import annotations


class InvalidSectionError(ValueError):
    """Raised when an update targets a section name the tree does not have."""

    def __init__(self, section: str) -> None:
        self.section = section
        super().__init__(f"Unknown section: {section!r}")


class InvalidFilterError(ValueError):
    """Raised for a PYQ filter key outside the recognized set."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Unknown PYQ filter: {key!r}")


class InvalidStatusError(ValueError):
    """Raised when an explicit status value is not part of its machine."""

    def __init__(self, value: str, allowed: list[str]) -> None:
        self.value = value
        self.allowed = allowed
        super().__init__(f"Invalid status {value!r}. Allowed: {allowed}")


class EntityNotFoundError(LookupError):
    """Raised when an edit addresses a subject, unit, or item that does not exist."""

    def __init__(self, kind: str, key: str) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"No {kind} found with key: {key}")


class MalformedEntityWarning(UserWarning):
    """A leaf record is missing or carries an unrecognized field value.

    Collected by :func:`studyctl.domain.checks.find_malformed`, never raised.
    """

    def __init__(
        self,
        entity: str,
        path: str,
        field: str,
        value: object,
        *,
        treated_as: str = "not-started",
    ) -> None:
        self.entity = entity
        self.path = path
        self.field = field
        self.value = value
        self.treated_as = treated_as
        super().__init__(f"{entity} {path}: {field}={value!r} (treated as {treated_as})")
