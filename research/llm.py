"""Generative backend: the Anthropic Messages API, prompt in and text out.

Nothing here interprets the model's reply. Structured-output handling lives
in ``research.extraction`` so that every call site degrades the same way.

The Anthropic client is lazy-initialised so that the class can be
instantiated in tests without requiring a live API key.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import anthropic

from research.errors import SynthesisBackendError

if TYPE_CHECKING:
    from config.settings import Settings

logger = logging.getLogger(__name__)

PING_PROMPT = 'Say "Hello, the generative backend is working!"'


class GenerativeBackend:
    """Single-turn text generation against Claude."""

    def __init__(self, settings: Settings) -> None:
        """Initialise the backend.

        Args:
            settings: Application configuration (must have ``anthropic_api_key``
                before any call is made).
        """
        self.settings = settings
        self._client: object = None  # Lazy-initialised anthropic.Anthropic

    @property
    def configured(self) -> bool:
        return bool(self.settings.anthropic_api_key)

    @property
    def client(self) -> object:
        """Lazy-initialise and return the Anthropic SDK client."""
        if self._client is None:
            # max_retries=5 so the SDK backs off and retries on 429 rate-limit
            # errors instead of failing the request outright.
            self._client = anthropic.Anthropic(
                api_key=self.settings.anthropic_api_key,
                max_retries=5,
            )
        return self._client

    def generate(self, prompt: str, max_tokens: int | None = None) -> str:
        """Send *prompt* as a single user message and return the reply text.

        Args:
            prompt: The complete prompt.
            max_tokens: Output budget; defaults to ``settings.synthesis_max_tokens``.

        Returns:
            The concatenated text blocks of the reply (possibly empty).

        Raises:
            SynthesisBackendError: If no API key is configured or the API call fails.
        """
        if not self.configured:
            raise SynthesisBackendError("Generative backend API key not configured")

        try:
            response = self.client.messages.create(
                model=self.settings.synthesis_model,
                max_tokens=max_tokens or self.settings.synthesis_max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as exc:
            logger.error("Generative backend call failed: %s", exc)
            raise SynthesisBackendError(str(exc)) from exc

        parts = [getattr(block, "text", None) for block in response.content or []]
        text = "".join(p for p in parts if isinstance(p, str))
        logger.debug("Generative backend returned %d chars", len(text))
        return text

    def ping(self) -> str:
        """Round-trip a trivial prompt to confirm the backend is reachable."""
        return self.generate(PING_PROMPT, max_tokens=50)
