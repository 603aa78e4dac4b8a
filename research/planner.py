"""Query planning for the federated literature search.

Turns a free-text topic query into the ordered list of arXiv query variants
issued by the federated executor, plus the single Semantic Scholar query.

Variant order is execution priority: the executor stops issuing arXiv
variants once it has collected enough papers, so the broadest match comes
first and the category-scoped matches last.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

ARXIV = "arxiv"
SEMANTIC_SCHOLAR = "semantic_scholar"

#: Boolean AND as understood by the arXiv query grammar. Spaces are sent as
#: ``+`` by the HTTP layer, giving the documented ``+AND+`` form on the wire.
AND_JOIN = " AND "

#: Tokens of this length or shorter carry no search signal ("of", "to", "AI").
MIN_TOKEN_LENGTH = 3

_NON_WORD = re.compile(r"[^\w\s]")

#: ``(field prefix, category scope)`` in priority order.
_ARXIV_STRATEGIES: list[tuple[str, Optional[str]]] = [
    ("all", None),
    ("ti", None),
    ("abs", None),
    ("all", "cs.CR"),   # Cryptography and Security
    ("all", "cs.DC"),   # Distributed, Parallel, and Cluster Computing
    ("all", "cs.AI"),   # Artificial Intelligence
]


# ── Data classes ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Query:
    """A user search request."""

    text: str
    category: Optional[str] = None


@dataclass(frozen=True)
class QueryVariant:
    """One backend-specific query string and its execution priority (1 = first)."""

    backend: str
    query: str
    priority: int


# ── Normalisation ──────────────────────────────────────────────────────────────


def normalize_terms(text: str) -> list[str]:
    """Strip punctuation and drop short tokens.

    Args:
        text: The raw query text.

    Returns:
        Remaining tokens in their original order.

    Examples:
        >>> normalize_terms("DeFi: yield-farming in 2024!")
        ['DeFi', 'yieldfarming', '2024']
    """
    cleaned = _NON_WORD.sub("", text).strip()
    return [token for token in cleaned.split() if len(token) >= MIN_TOKEN_LENGTH]


def build_match_clause(text: str) -> str:
    """Return the AND-joined search terms for *text* (empty if none survive)."""
    return AND_JOIN.join(normalize_terms(text))


# ── Planning ───────────────────────────────────────────────────────────────────


def plan_arxiv_variants(query: Query) -> list[QueryVariant]:
    """Build the ordered arXiv variants for *query*.

    The category hint does not change the variants; arXiv scoping uses the
    fixed subject categories above.

    Args:
        query: The search request.

    Returns:
        Six variants, most specific first: full text, title, abstract, then
        the three category-scoped full-text matches.
    """
    terms = build_match_clause(query.text)
    variants: list[QueryVariant] = []

    for rank, (prefix, category) in enumerate(_ARXIV_STRATEGIES, start=1):
        clause = f"{prefix}:{terms}"
        if category:
            clause = f"cat:{category}{AND_JOIN}{clause}"
        variants.append(QueryVariant(backend=ARXIV, query=clause, priority=rank))

    if not terms:
        logger.warning("Query %r has no searchable terms; arXiv variants are empty", query.text)
    return variants


def plan_scholar_variant(query: Query) -> QueryVariant:
    """Semantic Scholar does its own relevance matching, so the raw text is sent."""
    return QueryVariant(backend=SEMANTIC_SCHOLAR, query=query.text, priority=1)
