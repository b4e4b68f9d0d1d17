"""Shared service-layer helper functions."""

from __future__ import annotations

import datetime as dt
from datetime import UTC, datetime


def today() -> dt.date:
    """Today's UTC calendar date."""
    return datetime.now(UTC).date()


def parse_day(value: str | None) -> dt.date:
    """Parse a YYYY-MM-DD string; None means today.

    Raises:
        ValueError: *value* is not an ISO calendar date.
    """
    if value is None:
        return today()
    return dt.date.fromisoformat(value)
