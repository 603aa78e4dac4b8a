"""Topic digest synthesis using the generative backend.

One prompt, one call per request. The prompt pins the reply to a single JSON
object with a fixed set of fields; the reply is then run through
``extract_json`` and coerced into a ``DigestResult``.

Failure handling:

- Backend unreachable or erroring → ``SynthesisBackendError`` propagates and
  the whole search fails (the digest is the primary payload).
- Backend reachable but the reply is not parseable → the digest fallback
  below, with ``confidence=MEDIUM``. Never an error.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Optional

from pydantic import ValidationError as PydanticValidationError

from research.extraction import FallbackBuilder, extract_json
from research.llm import GenerativeBackend
from research.models import Confidence, DigestResult
from research.normalize import truncate

if TYPE_CHECKING:
    from config.settings import Settings

logger = logging.getLogger(__name__)

#: The platform's subject domain; off-topic queries are related back to it.
SUBJECT_DOMAIN = "Web3"

_DIGEST_PROMPT = """\
You are a {domain} research assistant. Please provide comprehensive, up-to-date information about: "{query}"
{category_line}
Respond with exactly one JSON object and nothing else, in this format:
{{
  "title": "A clear, descriptive title",
  "summary": "A 2-3 sentence summary of the topic",
  "keyPoints": ["Point 1", "Point 2", "Point 3", "Point 4", "Point 5"],
  "currentTrends": "Current trends and developments in this area",
  "technicalDetails": "Technical aspects and implementation details",
  "useCases": ["Use case 1", "Use case 2", "Use case 3"],
  "challenges": "Current challenges and limitations",
  "futureOutlook": "Future developments and predictions",
  "resources": ["Resource 1", "Resource 2", "Resource 3"],
  "relatedTopics": ["Related topic 1", "Related topic 2", "Related topic 3"],
  "lastUpdated": "Current date",
  "confidence": "HIGH, MEDIUM or LOW based on available information"
}}

Focus on:
- {domain}, blockchain, DeFi, NFTs, and related technologies
- Current market trends and developments
- Practical applications and use cases
- Technical implementation details
- Recent news and updates
- Expert insights and analysis

Make sure the information is accurate, up-to-date, and relevant to the {domain} ecosystem. \
If the topic is not directly related to {domain}, do not refuse: explain how it connects to \
or impacts the {domain} space.
"""


def build_digest_prompt(query: str, category: Optional[str] = None) -> str:
    """Render the digest prompt for *query*."""
    category_line = f"Category: {category}\n" if category else ""
    return _DIGEST_PROMPT.format(domain=SUBJECT_DOMAIN, query=query, category_line=category_line)


def digest_fallback(query: str) -> FallbackBuilder:
    """Return the builder for the digest used when the reply has no parseable JSON.

    The title echoes the query and the summary is the start of the raw reply,
    so the user still sees whatever the model said.
    """

    def build(raw_text: str) -> dict[str, Any]:
        return {
            "title": query,
            "summary": truncate(raw_text, 300) or "No summary available.",
            "keyPoints": [truncate(raw_text, 100), "More information available"]
            if raw_text else ["More information available"],
            "currentTrends": "Current trends information",
            "technicalDetails": "Technical details available",
            "useCases": ["Various use cases"],
            "challenges": "Current challenges",
            "futureOutlook": "Future outlook",
            "resources": ["Additional resources"],
            "relatedTopics": ["Related topics"],
            "lastUpdated": datetime.now(timezone.utc).isoformat(),
            "confidence": Confidence.MEDIUM.value,
            "rawResponse": raw_text,
        }

    return build


class SynthesisEngine:
    """Produces the ``DigestResult`` half of a search response."""

    def __init__(self, settings: Settings, backend: Optional[GenerativeBackend] = None) -> None:
        self.settings = settings
        self.backend = backend or GenerativeBackend(settings)

    def synthesize(self, query: str, category: Optional[str] = None) -> DigestResult:
        """Generate the digest for *query*.

        Args:
            query: The user's topic query.
            category: Optional category hint, passed through to the prompt.

        Returns:
            A ``DigestResult``; the fallback digest if the reply was unusable.

        Raises:
            SynthesisBackendError: If the generative backend call fails.
        """
        logger.info("Synthesising digest query=%r category=%s", query, category)
        fallback = digest_fallback(query)
        raw_text = self.backend.generate(build_digest_prompt(query, category))
        data = extract_json(raw_text, fallback)

        try:
            return DigestResult.model_validate(data)
        except PydanticValidationError as exc:
            logger.warning("Digest JSON could not be coerced, using fallback: %s", exc)
            return DigestResult.model_validate(fallback(raw_text))
