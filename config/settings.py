"""Application settings — all configuration loaded from environment variables.

Usage:
    from config.settings import Settings
    settings = Settings()
    settings.validate()   # raises ValueError if ANTHROPIC_API_KEY is missing
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class Settings:
    """Centralised application configuration.

    All values are read from environment variables at instantiation time
    so that tests can override them by patching ``os.environ``.
    """

    # ── API Keys ────────────────────────────────────────────────────────────
    anthropic_api_key: str = field(
        default_factory=lambda: os.environ.get("ANTHROPIC_API_KEY", "")
    )
    #: Optional; Semantic Scholar serves unauthenticated requests at a lower rate.
    semantic_scholar_api_key: str = field(
        default_factory=lambda: os.environ.get("SEMANTIC_SCHOLAR_API_KEY", "")
    )

    # ── Flask ───────────────────────────────────────────────────────────────
    debug: bool = field(
        default_factory=lambda: os.environ.get("FLASK_DEBUG", "0") == "1"
    )
    port: int = field(
        default_factory=lambda: int(os.environ.get("PORT", "5001"))
    )

    # ── Literature search ───────────────────────────────────────────────────
    #: ``max_results`` sent with every arXiv variant call.
    arxiv_max_results: int = field(
        default_factory=lambda: int(os.environ.get("ARXIV_MAX_RESULTS", "10"))
    )
    #: Stop issuing arXiv variants once this many unique papers are collected.
    arxiv_early_stop: int = field(
        default_factory=lambda: int(os.environ.get("ARXIV_EARLY_STOP", "8"))
    )
    #: Number of arXiv papers kept after the recency sort.
    arxiv_result_cap: int = field(
        default_factory=lambda: int(os.environ.get("ARXIV_RESULT_CAP", "6"))
    )
    scholar_limit: int = field(
        default_factory=lambda: int(os.environ.get("SCHOLAR_LIMIT", "5"))
    )
    #: Socket timeout (seconds) for literature backend HTTP calls.
    http_timeout: float = field(
        default_factory=lambda: float(os.environ.get("HTTP_TIMEOUT", "10"))
    )

    # ── AI Models ───────────────────────────────────────────────────────────
    #: Model used for digest synthesis, contract validation and profile vetting.
    synthesis_model: str = field(
        default_factory=lambda: os.environ.get("SYNTHESIS_MODEL", "claude-haiku-4-5")
    )
    synthesis_max_tokens: int = 2000

    def validate(self) -> None:
        """Raise ``ValueError`` if any required setting is missing."""
        if not self.anthropic_api_key:
            raise ValueError(
                "ANTHROPIC_API_KEY environment variable is not set. "
                "Copy .env.example to .env and add your key."
            )
