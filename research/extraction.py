"""Resilient JSON extraction from generative model output.

Models asked for "JSON only" still wrap it in prose ("Sure! Here's the
analysis: {...} Hope that helps!") or skip it entirely. Every generative
call site therefore parses the same way:

1. Take the span from the first ``{`` to the last ``}``.
2. ``json.loads`` it and return the result untouched.
3. On any failure, return ``fallback(raw_text)``, a complete default object
   specific to the call site.

``extract_json`` never raises. No field-level validation happens here;
callers must tolerate missing keys.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional

from research.errors import SynthesisParseError

logger = logging.getLogger(__name__)

#: Builds a call-site default from the raw model text (which may be empty).
FallbackBuilder = Callable[[str], dict[str, Any]]


def find_json_span(raw_text: str) -> str:
    """Return the text between the first ``{`` and the last ``}`` inclusive.

    Raises:
        SynthesisParseError: If there is no such brace pair.
    """
    start = raw_text.find("{")
    end = raw_text.rfind("}")
    if start == -1 or end < start:
        raise SynthesisParseError("no JSON object found in model output")
    return raw_text[start:end + 1]


def parse_json_object(raw_text: str) -> dict[str, Any]:
    """Strictly parse the embedded JSON object in *raw_text*.

    Raises:
        SynthesisParseError: If no object can be located or decoded.
    """
    span = find_json_span(raw_text)
    try:
        parsed = json.loads(span)
    except json.JSONDecodeError as exc:
        raise SynthesisParseError(f"invalid JSON in model output: {exc.msg}") from exc
    except RecursionError as exc:
        raise SynthesisParseError("model output JSON is nested too deeply") from exc
    if not isinstance(parsed, dict):
        raise SynthesisParseError("model output JSON is not an object")
    return parsed


def extract_json(raw_text: Optional[str], fallback: FallbackBuilder) -> dict[str, Any]:
    """Parse the JSON object embedded in *raw_text*, or build a safe default.

    Args:
        raw_text: Free-form model output.
        fallback: Call-site default builder; receives *raw_text* (``""`` if
            it was ``None``).

    Returns:
        The parsed object verbatim, or ``fallback(raw_text)``.

    Examples:
        >>> extract_json('Sure! {"title": "X"} Bye', lambda _: {})
        {'title': 'X'}
        >>> extract_json("no braces here", lambda _: {"title": "fallback"})
        {'title': 'fallback'}
    """
    text = raw_text or ""
    try:
        return parse_json_object(text)
    except SynthesisParseError as exc:
        logger.warning("Falling back to default object: %s (%d chars of output)", exc, len(text))
        return fallback(text)
