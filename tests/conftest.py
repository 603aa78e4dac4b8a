"""Shared fixtures for the research-hub test suite."""

from __future__ import annotations

import pytest

from config.settings import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(
        anthropic_api_key="test-key",
        semantic_scholar_api_key="",
        arxiv_max_results=10,
        arxiv_early_stop=8,
        arxiv_result_cap=6,
        scholar_limit=5,
        http_timeout=10,
    )
