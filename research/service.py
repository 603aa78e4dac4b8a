"""Search orchestration.

``ResearchService.search`` is the single entry point used by ``web/app.py``:

    validate query
      ├─ FederatedSearchExecutor.execute ──► merge (arXiv first, S2 after)
      └─ SynthesisEngine.synthesize (worker thread)
    both awaited ──► assemble_success

The federated branch never raises for backend failures. The synthesis branch
raises ``SynthesisBackendError``, which fails the whole request. Nothing is
kept between calls.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Optional

from research.assembler import assemble_success
from research.errors import ValidationError
from research.federated import FederatedSearchExecutor
from research.merger import merge
from research.models import SearchResponse
from research.planner import Query
from research.synthesis import SynthesisEngine

if TYPE_CHECKING:
    from config.settings import Settings

logger = logging.getLogger(__name__)


class ResearchService:
    """Answers a topic query with a digest plus federated literature results."""

    def __init__(
        self,
        settings: Settings,
        executor: Optional[FederatedSearchExecutor] = None,
        engine: Optional[SynthesisEngine] = None,
    ) -> None:
        self.settings = settings
        self.executor = executor or FederatedSearchExecutor(settings)
        self.engine = engine or SynthesisEngine(settings)

    async def search(self, query: Optional[str], category: Optional[str] = None) -> SearchResponse:
        """Run a full search for *query*.

        Args:
            query: Free-text topic query.
            category: Optional category hint, echoed back in the response.

        Returns:
            The success envelope. Its document list may be empty if both
            literature backends failed.

        Raises:
            ValidationError: If the query is missing or blank.
            SynthesisBackendError: If the generative backend is unavailable.
        """
        text = (query or "").strip()
        if not text:
            raise ValidationError("Query is required")

        request = Query(text=text, category=category)
        logger.info("Search query=%r category=%s", text, category)

        federated, digest = await asyncio.gather(
            self.executor.execute(request),
            asyncio.to_thread(self.engine.synthesize, text, category),
        )

        documents = merge(federated.arxiv, federated.scholar)
        logger.info("Search complete: %d documents", len(documents))
        return assemble_success(digest, documents, text, category)
