"""Tests for research/arxiv_client.py — Atom parsing and error mapping."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
import requests

from research.arxiv_client import (
    ARXIV_API_URL,
    format_display_date,
    parse_feed,
    parse_published,
    search_arxiv,
)
from research.errors import LiteratureBackendError

LONG_ABSTRACT = "word " * 60

FEED = f"""<feed xmlns="http://www.w3.org/2005/Atom">
  <entry>
    <id>http://arxiv.org/abs/2401.01234v2</id>
    <published>2024-01-05T18:00:00Z</published>
    <title>Yield Farming
      in   DeFi</title>
    <summary>{LONG_ABSTRACT}</summary>
    <author><name>Alice Smith</name></author>
    <author><name>Bob Jones</name></author>
  </entry>
  <entry>
    <id>http://arxiv.org/abs/2312.09999v1</id>
    <published>2023-12-20T09:30:00Z</published>
    <title>Short One</title>
    <summary>Tiny abstract.</summary>
  </entry>
  <entry>
    <title>No id at all</title>
  </entry>
</feed>"""

ERROR_FEED = """<feed xmlns="http://www.w3.org/2005/Atom">
  <entry>
    <id>http://arxiv.org/api/errors#incorrect_id_format_for_1234</id>
    <title>Error</title>
    <summary>incorrect id format for 1234</summary>
  </entry>
</feed>"""


def fake_response(text: str = FEED, status_error: Exception | None = None) -> MagicMock:
    response = MagicMock()
    response.text = text
    if status_error:
        response.raise_for_status.side_effect = status_error
    return response


# ── Date helpers ───────────────────────────────────────────────────────────────


class TestDates:
    def test_parses_zulu_timestamp(self):
        assert parse_published("2024-01-05T18:00:00Z") == datetime(
            2024, 1, 5, 18, 0, tzinfo=timezone.utc
        )

    def test_unparseable_is_none(self):
        assert parse_published("yesterday") is None
        assert parse_published(None) is None

    def test_display_format_has_no_zero_padding(self):
        assert format_display_date(datetime(2024, 1, 5)) == "1/5/2024"

    def test_display_unknown_when_missing(self):
        assert format_display_date(None) == "Unknown"


# ── Feed parsing ───────────────────────────────────────────────────────────────


class TestParseFeed:
    def test_parses_entries_and_skips_missing_ids(self):
        docs = parse_feed(FEED)
        assert [d.id for d in docs] == ["2401.01234v2", "2312.09999v1"]

    def test_normalises_fields(self):
        doc = parse_feed(FEED)[0]
        assert doc.title == "Yield Farming in DeFi"
        assert doc.authors == ["Alice Smith", "Bob Jones"]
        assert doc.pdf_link == "https://arxiv.org/pdf/2401.01234v2.pdf"
        assert doc.source_link == "https://arxiv.org/abs/2401.01234v2"
        assert doc.published_date == "1/5/2024"
        assert doc.source_name == "arXiv"
        assert doc.published_at.year == 2024

    def test_truncates_long_abstract(self):
        doc = parse_feed(FEED)[0]
        assert len(doc.abstract) == 203
        assert doc.abstract.endswith("...")

    def test_short_abstract_untouched(self):
        assert parse_feed(FEED)[1].abstract == "Tiny abstract."

    def test_empty_feed(self):
        assert parse_feed('<feed xmlns="http://www.w3.org/2005/Atom"></feed>') == []

    def test_malformed_xml_raises(self):
        with pytest.raises(LiteratureBackendError):
            parse_feed("<feed><entry>")

    def test_error_feed_raises(self):
        with pytest.raises(LiteratureBackendError, match="incorrect id format"):
            parse_feed(ERROR_FEED)


# ── search_arxiv ───────────────────────────────────────────────────────────────


class TestSearchArxiv:
    @patch("research.arxiv_client.requests.get")
    def test_sends_query_params(self, mock_get):
        mock_get.return_value = fake_response()
        search_arxiv("ti:yield AND farming", max_results=10, timeout=3)

        args, kwargs = mock_get.call_args
        assert args[0] == ARXIV_API_URL
        assert kwargs["params"]["search_query"] == "ti:yield AND farming"
        assert kwargs["params"]["max_results"] == 10
        assert kwargs["params"]["sortBy"] == "relevance"
        assert kwargs["params"]["sortOrder"] == "descending"
        assert kwargs["timeout"] == 3

    @patch("research.arxiv_client.requests.get")
    def test_returns_documents(self, mock_get):
        mock_get.return_value = fake_response()
        assert len(search_arxiv("all:defi")) == 2

    @patch("research.arxiv_client.requests.get")
    def test_connection_error_becomes_backend_error(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("down")
        with pytest.raises(LiteratureBackendError, match="arXiv"):
            search_arxiv("all:defi")

    @patch("research.arxiv_client.requests.get")
    def test_http_error_becomes_backend_error(self, mock_get):
        mock_get.return_value = fake_response(status_error=requests.HTTPError("503"))
        with pytest.raises(LiteratureBackendError):
            search_arxiv("all:defi")
