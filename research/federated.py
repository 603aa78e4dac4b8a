"""Federated literature search across arXiv and Semantic Scholar.

Responsibilities:
- Issue the planned arXiv variants one at a time, accumulating unique papers
  and stopping early once enough have been collected
- Issue the single Semantic Scholar query alongside the arXiv loop
- Isolate failures: a backend that errors contributes zero papers, it never
  fails the search
- Sort arXiv papers newest first and cap both result lists

The arXiv loop has four observable states: issuing variant *i*, accumulating
its results, stopped at the early-stop threshold, or out of variants. The
threshold check runs after each variant's results are merged in, so the
variant that crosses it is still fully counted.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from research.arxiv_client import search_arxiv
from research.errors import LiteratureBackendError
from research.models import Document
from research.planner import Query, QueryVariant, plan_arxiv_variants, plan_scholar_variant
from research.scholar_client import search_semantic_scholar

if TYPE_CHECKING:
    from config.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class FederatedResult:
    """Per-backend document lists, already sorted and capped."""

    arxiv: list[Document] = field(default_factory=list)
    scholar: list[Document] = field(default_factory=list)


def _recency_key(doc: Document) -> tuple[int, float]:
    # Undated papers compare lowest so they trail after a descending sort.
    if doc.published_at is None:
        return (0, 0.0)
    return (1, doc.published_at.timestamp())


def sort_by_recency(documents: list[Document]) -> list[Document]:
    """Newest first. Stable: equal timestamps keep discovery order."""
    return sorted(documents, key=_recency_key, reverse=True)


class FederatedSearchExecutor:
    """Fans a query out to both literature backends.

    Both clients are blocking ``requests`` calls, so each backend runs in a
    worker thread via ``asyncio.to_thread`` and the two are awaited together.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialise the executor.

        Args:
            settings: Application configuration (limits, timeout, S2 key).
        """
        self.settings = settings

    # ── Backend A: arXiv ───────────────────────────────────────────────────

    def should_stop(self, collected: int) -> bool:
        """Return ``True`` once *collected* unique papers reach the early-stop threshold."""
        return collected >= self.settings.arxiv_early_stop

    def _run_variant(self, variant: QueryVariant) -> list[Document]:
        try:
            return search_arxiv(
                variant.query,
                max_results=self.settings.arxiv_max_results,
                timeout=self.settings.http_timeout,
            )
        except LiteratureBackendError as exc:
            logger.warning("arXiv variant #%d failed, skipping: %s", variant.priority, exc)
        except Exception:
            logger.exception("arXiv variant #%d raised unexpectedly, skipping", variant.priority)
        return []

    def collect_arxiv(self, variants: list[QueryVariant]) -> list[Document]:
        """Issue *variants* in priority order until the early-stop threshold is hit.

        Args:
            variants: arXiv variants, highest priority first.

        Returns:
            Unique papers in discovery order (first occurrence of each id wins).
        """
        collected: dict[str, Document] = {}

        for variant in sorted(variants, key=lambda v: v.priority):
            for doc in self._run_variant(variant):
                collected.setdefault(doc.id, doc)

            if self.should_stop(len(collected)):
                logger.info(
                    "arXiv early stop after variant #%d with %d papers",
                    variant.priority, len(collected),
                )
                break
        else:
            logger.info("arXiv variants exhausted with %d papers", len(collected))

        return list(collected.values())

    def run_arxiv(self, query: Query) -> list[Document]:
        """Collect, sort newest-first, and cap the arXiv results for *query*."""
        papers = self.collect_arxiv(plan_arxiv_variants(query))
        return sort_by_recency(papers)[:self.settings.arxiv_result_cap]

    # ── Backend B: Semantic Scholar ────────────────────────────────────────

    def run_scholar(self, query: Query) -> list[Document]:
        """Issue the single Semantic Scholar query; failures yield ``[]``."""
        variant = plan_scholar_variant(query)
        try:
            papers = search_semantic_scholar(
                variant.query,
                limit=self.settings.scholar_limit,
                api_key=self.settings.semantic_scholar_api_key,
                timeout=self.settings.http_timeout,
            )
        except LiteratureBackendError as exc:
            logger.warning("Semantic Scholar search failed, skipping: %s", exc)
            return []
        except Exception:
            logger.exception("Semantic Scholar search raised unexpectedly, skipping")
            return []
        return papers[:self.settings.scholar_limit]

    # ── Fan-out ────────────────────────────────────────────────────────────

    async def execute(self, query: Query) -> FederatedResult:
        """Run both backends concurrently and wait for both.

        Never raises for backend failures; a dead backend just returns nothing.
        """
        arxiv_docs, scholar_docs = await asyncio.gather(
            asyncio.to_thread(self.run_arxiv, query),
            asyncio.to_thread(self.run_scholar, query),
        )
        logger.info(
            "Federated search query=%r arxiv=%d semantic_scholar=%d",
            query.text, len(arxiv_docs), len(scholar_docs),
        )
        return FederatedResult(arxiv=arxiv_docs, scholar=scholar_docs)
