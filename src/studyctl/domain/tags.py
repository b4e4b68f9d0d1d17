"""Tag parsing — comma-separated input to an ordered, de-duplicated tuple."""

from __future__ import annotations

from collections.abc import Iterable


def parse_tag_list(raw: str) -> tuple[str, ...]:
    """Split comma-separated user input into tags.

    Examples:
        >>> parse_tag_list("exam, algebra,,  exam")
        ('exam', 'algebra')
        >>> parse_tag_list("")
        ()
    """
    return normalize_tags(raw.split(","))


def normalize_tags(tags: Iterable[str] | str | None) -> tuple[str, ...]:
    """Strip blanks and drop duplicates, keeping first-seen order."""
    if tags is None:
        return ()
    if isinstance(tags, str):
        return parse_tag_list(tags)
    seen: dict[str, None] = {}
    for tag in tags:
        cleaned = str(tag).strip()
        if cleaned and cleaned not in seen:
            seen[cleaned] = None
    return tuple(seen)
