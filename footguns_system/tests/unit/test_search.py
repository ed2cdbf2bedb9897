"""
Unit tests for footgun keyword search.
"""

import pytest

from src.catalog import FootgunSearchEngine
from src.catalog.search import tokenize


class TestTokenize:

    def test_drops_stop_words_and_short_words(self):
        assert tokenize("The cache is on a warm instance") == ["cache", "warm", "instance"]

    def test_lowercases(self):
        assert tokenize("SvelteKit Layout") == ["sveltekit", "layout"]


class TestFootgunSearchEngine:
    """Tests for FootgunSearchEngine."""

    @pytest.fixture
    def engine(self, sample_catalog):
        return FootgunSearchEngine(sample_catalog)

    def test_title_match_ranks_first(self, engine):
        """Test a title hit outranks weaker matches."""
        results = engine.search("layout guard")

        assert results[0].record.id == 2
        assert results[0].relevance_score == pytest.approx(1.0)
        assert results[0].matched_terms == ["layout", "guard"]

    def test_matches_explanation_text(self, engine):
        """Test explanation words are indexed."""
        results = engine.search("invocations")

        assert [m.record.id for m in results] == [3]

    def test_matches_framework_name(self, engine):
        """Test framework names are searchable."""
        results = engine.search("firebase")

        assert results[0].record.framework == "Firebase"

    def test_limit(self, engine):
        """Test the limit caps results."""
        assert len(engine.search("handler handlers", limit=1)) <= 1

    def test_no_match(self, engine):
        """Test unrelated query returns nothing."""
        assert engine.search("kubernetes") == []

    def test_stop_word_query(self, engine):
        """Test a query of only stop words returns nothing."""
        assert engine.search("the and of") == []

    def test_statistics(self, engine):
        """Test index statistics."""
        stats = engine.get_statistics()

        assert stats["indexed_footguns"] == 3
        assert stats["unique_words_indexed"] > 0
