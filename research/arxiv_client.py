"""arXiv Atom API client (Backend A).

One call per query variant. Every failure mode (transport error, HTTP error
status, unparseable XML, arXiv's in-band error feed) is raised as
``LiteratureBackendError`` so the federated executor can treat them alike.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

import requests
from defusedxml import DefusedXmlException
from defusedxml import ElementTree as ET

from research.errors import LiteratureBackendError
from research.models import Document
from research.normalize import clean_text, truncate_abstract

logger = logging.getLogger(__name__)

ARXIV_API_URL = "https://export.arxiv.org/api/query"
ARXIV_ABS_URL = "https://arxiv.org/abs/{}"
ARXIV_PDF_URL = "https://arxiv.org/pdf/{}.pdf"
ATOM_NS = "{http://www.w3.org/2005/Atom}"
SOURCE_NAME = "arXiv"

#: arXiv reports bad queries as a feed whose single entry has an id under this path.
_ERROR_ENTRY_MARKER = "/api/errors"


def parse_published(value: Optional[str]) -> Optional[datetime]:
    """Parse an Atom timestamp such as ``2024-01-05T18:00:00Z``."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Unparseable arXiv timestamp: %r", value)
        return None


def format_display_date(value: Optional[datetime]) -> str:
    """Render *value* as ``M/D/YYYY`` (e.g. ``1/5/2024``)."""
    if value is None:
        return "Unknown"
    return f"{value.month}/{value.day}/{value.year}"


def _entry_text(entry: object, tag: str) -> str:
    elem = entry.find(f"{ATOM_NS}{tag}")
    return elem.text if elem is not None and elem.text else ""


def parse_feed(xml_text: str) -> list[Document]:
    """Convert an arXiv Atom feed into ``Document`` objects.

    Entries without an id are skipped.

    Raises:
        LiteratureBackendError: If the XML is malformed or is arXiv's error feed.
    """
    try:
        root = ET.fromstring(xml_text)
    except (ET.ParseError, DefusedXmlException) as exc:
        raise LiteratureBackendError(SOURCE_NAME, f"malformed Atom feed: {exc}") from exc

    documents: list[Document] = []
    for entry in root.findall(f"{ATOM_NS}entry"):
        entry_id = _entry_text(entry, "id").strip()
        if _ERROR_ENTRY_MARKER in entry_id:
            raise LiteratureBackendError(
                SOURCE_NAME, f"query rejected: {clean_text(_entry_text(entry, 'summary'))}"
            )

        arxiv_id = entry_id.rstrip("/").rsplit("/", 1)[-1]
        if not arxiv_id:
            continue

        authors = [
            clean_text(name.text)
            for author in entry.findall(f"{ATOM_NS}author")
            if (name := author.find(f"{ATOM_NS}name")) is not None and name.text
        ]
        published_at = parse_published(_entry_text(entry, "published"))
        abstract_url = ARXIV_ABS_URL.format(arxiv_id)

        documents.append(Document(
            id=arxiv_id,
            title=clean_text(_entry_text(entry, "title")),
            authors=authors,
            abstract=truncate_abstract(_entry_text(entry, "summary")),
            pdf_link=ARXIV_PDF_URL.format(arxiv_id),
            source_link=abstract_url,
            published_date=format_display_date(published_at),
            source_name=SOURCE_NAME,
            published_at=published_at,
        ))

    return documents


def search_arxiv(search_query: str, max_results: int = 10, timeout: float = 10) -> list[Document]:
    """Run one arXiv query.

    Args:
        search_query: A field-scoped arXiv query, e.g. ``"ti:zero AND knowledge"``.
        max_results: Page size requested from arXiv.
        timeout: Socket timeout in seconds.

    Returns:
        Documents in arXiv's relevance order.

    Raises:
        LiteratureBackendError: On any transport, HTTP or payload failure.
    """
    params = {
        "search_query": search_query,
        "start": 0,
        "max_results": max_results,
        "sortBy": "relevance",
        "sortOrder": "descending",
    }

    try:
        response = requests.get(ARXIV_API_URL, params=params, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise LiteratureBackendError(SOURCE_NAME, f"request failed: {exc}") from exc

    documents = parse_feed(response.text)
    logger.info("arXiv query=%r returned %d entries", search_query, len(documents))
    return documents
