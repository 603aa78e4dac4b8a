"""Cross-source deduplication of literature results.

arXiv and Semantic Scholar assign unrelated ids to the same paper, so the
only shared key is the title. arXiv results come first and keep their
recency order; Semantic Scholar results trail. There is no re-sort after the
merge, and when both backends return the same paper the arXiv copy (which has
a direct PDF link and a full timestamp) is the one kept.
"""

from __future__ import annotations

import logging
import re

from research.models import Document

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")


def title_key(title: str) -> str:
    """Collapse whitespace runs to a single space; no case folding, no trimming.

    Examples:
        >>> title_key("Zero  Knowledge\\nProofs")
        'Zero Knowledge Proofs'
    """
    return _WHITESPACE_RUN.sub(" ", title or "")


def deduplicate(documents: list[Document]) -> list[Document]:
    """Remove later documents whose title matches an earlier one.

    Args:
        documents: Documents in priority order.

    Returns:
        The first occurrence of each title, in original order.
    """
    seen: set[str] = set()
    unique: list[Document] = []

    for doc in documents:
        key = title_key(doc.title)
        if key in seen:
            continue
        seen.add(key)
        unique.append(doc)

    return unique


def merge(arxiv_docs: list[Document], scholar_docs: list[Document]) -> list[Document]:
    """Concatenate arXiv then Semantic Scholar results and drop duplicate titles."""
    merged = deduplicate([*arxiv_docs, *scholar_docs])
    logger.info(
        "Merged %d arXiv + %d Semantic Scholar → %d unique documents",
        len(arxiv_docs), len(scholar_docs), len(merged),
    )
    return merged
