"""Tests for research/planner.py — query normalisation and variant ordering."""

from __future__ import annotations

import pytest

from research.planner import (
    AND_JOIN,
    ARXIV,
    SEMANTIC_SCHOLAR,
    Query,
    build_match_clause,
    normalize_terms,
    plan_arxiv_variants,
    plan_scholar_variant,
)


def _terms(clause: str) -> list[str]:
    """Strip field prefixes/category scopes from an arXiv clause, return its terms."""
    match = clause.rsplit(":", 1)[-1]
    return [t for t in match.split(AND_JOIN) if t]


# ── Normalisation ──────────────────────────────────────────────────────────────


class TestNormalizeTerms:
    def test_drops_tokens_of_two_chars_or_fewer(self):
        assert normalize_terms("AI in DeFi yield farming") == ["DeFi", "yield", "farming"]

    def test_strips_punctuation(self):
        assert normalize_terms("zk-SNARKs: a survey!") == ["zkSNARKs", "survey"]

    def test_keeps_three_char_tokens(self):
        assert normalize_terms("NFT art") == ["NFT", "art"]

    def test_collapses_extra_whitespace(self):
        assert normalize_terms("  layer   two\trollups ") == ["layer", "two", "rollups"]

    def test_all_short_tokens_yield_nothing(self):
        assert normalize_terms("a to of") == []


class TestBuildMatchClause:
    def test_joins_with_and(self):
        assert build_match_clause("DeFi yield farming") == "DeFi AND yield AND farming"

    def test_empty_when_nothing_survives(self):
        assert build_match_clause("is it") == ""


# ── Variant planning ───────────────────────────────────────────────────────────


class TestPlanArxivVariants:
    def test_fixed_priority_order(self):
        variants = plan_arxiv_variants(Query("DeFi yield farming protocols"))
        assert [v.query for v in variants] == [
            "all:DeFi AND yield AND farming AND protocols",
            "ti:DeFi AND yield AND farming AND protocols",
            "abs:DeFi AND yield AND farming AND protocols",
            "cat:cs.CR AND all:DeFi AND yield AND farming AND protocols",
            "cat:cs.DC AND all:DeFi AND yield AND farming AND protocols",
            "cat:cs.AI AND all:DeFi AND yield AND farming AND protocols",
        ]

    def test_priorities_are_sequential_from_one(self):
        variants = plan_arxiv_variants(Query("zero knowledge proofs"))
        assert [v.priority for v in variants] == [1, 2, 3, 4, 5, 6]

    def test_all_variants_target_arxiv(self):
        variants = plan_arxiv_variants(Query("zero knowledge proofs"))
        assert {v.backend for v in variants} == {ARXIV}

    def test_at_least_four_variants(self):
        assert len(plan_arxiv_variants(Query("DeFi yield farming protocols"))) >= 4

    @pytest.mark.parametrize("text", [
        "AI in DeFi yield farming",
        "a zk rollup on L2 by me",
        "MEV is a tax on users",
    ])
    def test_no_short_token_in_any_clause(self, text):
        for variant in plan_arxiv_variants(Query(text)):
            assert all(len(term) > 2 for term in _terms(variant.query))

    def test_degenerate_query_gives_empty_match_clauses(self):
        variants = plan_arxiv_variants(Query("is it ok"))
        assert variants[0].query == "all:"
        assert variants[1].query == "ti:"
        assert variants[3].query == "cat:cs.CR AND all:"

    def test_category_hint_does_not_change_clauses(self):
        plain = plan_arxiv_variants(Query("staking rewards"))
        hinted = plan_arxiv_variants(Query("staking rewards", category="Finance"))
        assert [v.query for v in plain] == [v.query for v in hinted]


class TestPlanScholarVariant:
    def test_sends_raw_text(self):
        variant = plan_scholar_variant(Query("AI in DeFi: yield farming?"))
        assert variant.backend == SEMANTIC_SCHOLAR
        assert variant.query == "AI in DeFi: yield farming?"
        assert variant.priority == 1
