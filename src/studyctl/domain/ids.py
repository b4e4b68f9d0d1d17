"""Identifier generation for new notes and PYQ items.

IDs are opaque strings: nothing in the core assumes a format or length.
The default generator is a UUID4. If the generator fails, a timestamp
plus random base-36 suffix is used instead so creation never fails.

INVARIANT: IDs are permanent. Once generated, an ID never changes.
"""

from __future__ import annotations

import logging
import secrets
import string
import time
import uuid
from collections.abc import Callable

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase
FALLBACK_SUFFIX_LENGTH = 9


def fallback_id() -> str:
    """Millisecond timestamp followed by a random base-36 suffix."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(FALLBACK_SUFFIX_LENGTH))
    return f"{int(time.time() * 1000)}{suffix}"


def generate_id(factory: Callable[[], object] = uuid.uuid4) -> str:
    """Return a new unique ID from *factory*, falling back on failure."""
    try:
        value = str(factory())
    except Exception:
        logger.warning("ID generation failed, using fallback", exc_info=True)
        return fallback_id()
    if not validate_id(value):
        logger.warning("ID generator returned a blank value, using fallback")
        return fallback_id()
    return value


def validate_id(content_id: object) -> bool:
    """Check that *content_id* is a usable ID (any non-blank string)."""
    return isinstance(content_id, str) and bool(content_id.strip())
