"""Text helpers shared by the literature clients and the merger."""

from __future__ import annotations

import re
from typing import Optional

CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x0c\x0e-\x1f\x7f-\x9f]")
_WHITESPACE = re.compile(r"\s+")

#: Abstracts longer than this are cut and suffixed with ``ELLIPSIS``.
ABSTRACT_LIMIT = 200
ELLIPSIS = "..."


def collapse_whitespace(value: Optional[str]) -> str:
    """Collapse runs of whitespace to a single space and trim the ends."""
    if not value:
        return ""
    return _WHITESPACE.sub(" ", value).strip()


def clean_text(value: Optional[str]) -> str:
    """Drop control characters, then collapse whitespace."""
    if value is None:
        return ""
    return collapse_whitespace(CONTROL_CHARS.sub("", value))


def truncate(value: str, limit: int) -> str:
    """Return the first *limit* characters of *value*, marking any cut with ``...``."""
    if len(value) <= limit:
        return value
    return value[:limit] + ELLIPSIS


def truncate_abstract(value: Optional[str]) -> str:
    return truncate(clean_text(value), ABSTRACT_LIMIT)
