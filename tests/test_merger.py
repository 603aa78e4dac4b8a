"""Tests for research/merger.py — cross-source title deduplication."""

from __future__ import annotations

from research.merger import deduplicate, merge, title_key
from research.models import Document


def make_doc(doc_id: str, title: str, source: str = "arXiv") -> Document:
    return Document(id=doc_id, title=title, source_name=source)


class TestTitleKey:
    def test_collapses_whitespace_runs(self):
        assert title_key("Flash  Loans\n in\tDeFi") == "Flash Loans in DeFi"

    def test_is_case_sensitive(self):
        assert title_key("DeFi") != title_key("defi")


class TestDeduplicate:
    def test_keeps_first_occurrence(self):
        first = make_doc("1", "Same Title")
        second = make_doc("2", "Same Title")
        assert deduplicate([first, second]) == [first]

    def test_whitespace_variants_are_duplicates(self):
        docs = [make_doc("1", "Flash Loans in DeFi"), make_doc("2", "Flash  Loans\nin DeFi")]
        assert [d.id for d in deduplicate(docs)] == ["1"]

    def test_different_case_is_not_a_duplicate(self):
        docs = [make_doc("1", "Flash Loans"), make_doc("2", "flash loans")]
        assert len(deduplicate(docs)) == 2

    def test_preserves_order(self):
        docs = [make_doc(str(i), f"T{i}") for i in (3, 1, 2)]
        assert [d.id for d in deduplicate(docs)] == ["3", "1", "2"]

    def test_empty(self):
        assert deduplicate([]) == []


class TestMerge:
    def test_arxiv_copy_wins_over_scholar(self):
        arxiv = [make_doc("2401.1", "Shared Paper")]
        scholar = [make_doc("s2-abc", "Shared  Paper", source="Semantic Scholar")]
        merged = merge(arxiv, scholar)
        assert len(merged) == 1
        assert merged[0].source_name == "arXiv"

    def test_scholar_results_trail_without_resort(self):
        arxiv = [make_doc("a1", "Alpha"), make_doc("a2", "Beta")]
        scholar = [make_doc("s1", "Gamma", source="Semantic Scholar")]
        assert [d.id for d in merge(arxiv, scholar)] == ["a1", "a2", "s1"]

    def test_duplicates_within_scholar_are_dropped(self):
        scholar = [
            make_doc("s1", "Gamma", source="Semantic Scholar"),
            make_doc("s2", "Gamma", source="Semantic Scholar"),
        ]
        assert [d.id for d in merge([], scholar)] == ["s1"]

    def test_length_never_exceeds_sum_of_inputs(self):
        arxiv = [make_doc(f"a{i}", f"A{i}") for i in range(6)]
        scholar = [make_doc(f"s{i}", f"S{i}", source="Semantic Scholar") for i in range(5)]
        assert len(merge(arxiv, scholar)) == 11
