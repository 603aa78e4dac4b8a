"""Response envelopes.

Degraded literature backends are invisible here: a search with zero
documents is still ``success: true``. Only a failed digest or invalid input
produces the error envelope.
"""

from __future__ import annotations

from typing import Any, Optional

from research.errors import ValidationError
from research.models import DigestResult, Document, ErrorResponse, SearchResponse

#: Generic message for request-level search failures.
SEARCH_FAILED = "Failed to search"


def assemble_success(
    digest: DigestResult,
    documents: list[Document],
    query: str,
    category: Optional[str],
) -> SearchResponse:
    """Build the ``success: true`` envelope."""
    return SearchResponse(
        digest=digest,
        documents=documents,
        query=query,
        category=category,
    )


def assemble_error(error: str, details: Optional[str] = None) -> ErrorResponse:
    """Build the ``success: false`` envelope."""
    return ErrorResponse(error=error, details=details)


def error_status(exc: BaseException) -> int:
    """HTTP status for a request-level failure: 400 for bad input, else 500."""
    return 400 if isinstance(exc, ValidationError) else 500


def to_payload(response: SearchResponse | ErrorResponse) -> dict[str, Any]:
    """Serialise an envelope with camelCase keys, as sent over HTTP."""
    return response.model_dump(mode="json", by_alias=True)
