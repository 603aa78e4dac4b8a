"""Semantic Scholar Graph API client (Backend B)."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

import requests

from research.errors import LiteratureBackendError
from research.models import Document
from research.normalize import clean_text, truncate_abstract

logger = logging.getLogger(__name__)

S2_API_URL = "https://api.semanticscholar.org/graph/v1/paper/search"
S2_FIELDS = [
    "title",
    "authors",
    "abstract",
    "url",
    "year",
    "publicationDate",
    "paperId",
]
SOURCE_NAME = "Semantic Scholar"


def _published_at(paper: dict[str, Any]) -> Optional[datetime]:
    publication_date = paper.get("publicationDate")
    if publication_date:
        try:
            return datetime.fromisoformat(publication_date)
        except ValueError:
            logger.debug("Unparseable S2 publicationDate: %r", publication_date)
    year = paper.get("year")
    if isinstance(year, int):
        return datetime(year, 1, 1)
    return None


def normalize_paper(paper: dict[str, Any]) -> Optional[Document]:
    """Map one S2 search hit onto a ``Document``; ``None`` if it has no paperId."""
    paper_id = paper.get("paperId")
    if not paper_id:
        return None

    authors = [
        clean_text(a["name"])
        for a in paper.get("authors") or []
        if isinstance(a, dict) and isinstance(a.get("name"), str) and a["name"]
    ]
    abstract = truncate_abstract(paper.get("abstract")) or "No abstract available"
    url = paper.get("url") or "#"
    year = paper.get("year")

    return Document(
        id=str(paper_id),
        title=clean_text(paper.get("title")),
        authors=authors or ["Unknown"],
        abstract=abstract,
        pdf_link=url,
        source_link=url,
        published_date=str(year) if year else "Unknown",
        source_name=SOURCE_NAME,
        published_at=_published_at(paper),
    )


def search_semantic_scholar(
    query: str,
    limit: int = 5,
    api_key: str = "",
    timeout: float = 10,
) -> list[Document]:
    """Run one Semantic Scholar relevance search.

    Args:
        query: Free-text query, sent unmodified.
        limit: Maximum number of papers requested.
        api_key: Optional ``x-api-key``; unauthenticated requests share a
            public rate limit.
        timeout: Socket timeout in seconds.

    Returns:
        At most *limit* documents, in the order the API returned them.

    Raises:
        LiteratureBackendError: On any transport, HTTP or payload failure.
    """
    params = {
        "query": query,
        "limit": limit,
        "fields": ",".join(S2_FIELDS),
    }
    headers = {"x-api-key": api_key} if api_key else {}

    try:
        response = requests.get(S2_API_URL, params=params, headers=headers, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except requests.RequestException as exc:
        raise LiteratureBackendError(SOURCE_NAME, f"request failed: {exc}") from exc
    except ValueError as exc:
        raise LiteratureBackendError(SOURCE_NAME, f"invalid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise LiteratureBackendError(SOURCE_NAME, "unexpected payload shape")

    hits = payload.get("data") or []
    if not isinstance(hits, list):
        raise LiteratureBackendError(SOURCE_NAME, "'data' is not a list")

    documents = [
        doc for doc in (normalize_paper(p) for p in hits if isinstance(p, dict))
        if doc is not None
    ]
    logger.info("Semantic Scholar query=%r returned %d papers", query, len(documents))
    return documents[:limit]
