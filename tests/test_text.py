"""Tests for text normalization and similarity helpers."""

import pytest

from engagement_integrity.evaluators.text import (
    add_indicator,
    clamp_score,
    contains_any,
    count_urls,
    jaccard,
    tokenize,
    uppercase_ratio,
)


class TestTokenize:
    """Tests for tokenize."""

    def test_lowercases_and_splits_on_punctuation(self):
        assert tokenize("Hello, WORLD! foo-bar") == ["hello", "world", "foo", "bar"]

    def test_strips_urls(self):
        assert tokenize("see https://example.com/a?b=1 now") == ["see", "now"]

    def test_deduplicates_keeping_first_order(self):
        assert tokenize("b a b c a") == ["b", "a", "c"]

    def test_empty_text(self):
        assert tokenize("") == []
        assert tokenize("!!! ...") == []


class TestJaccard:
    """Tests for jaccard similarity."""

    def test_identical_sets(self):
        assert jaccard({"a", "b"}, {"a", "b"}) == 1.0

    def test_both_empty(self):
        assert jaccard(set(), set()) == 0.0

    def test_disjoint(self):
        assert jaccard({"a"}, {"b"}) == 0.0

    def test_partial_overlap(self):
        assert jaccard(["a", "b", "c"], ["b", "c", "d"]) == pytest.approx(0.5)

    def test_symmetric(self):
        a, b = {"x", "y", "z"}, {"y", "q"}
        assert jaccard(a, b) == jaccard(b, a)


class TestHelpers:
    """Tests for the remaining helpers."""

    def test_contains_any_is_case_insensitive(self):
        assert contains_any("Please RETWEET this", ["retweet"])
        assert not contains_any("hello", ["retweet", "quote"])

    def test_count_urls(self):
        assert count_urls("a http://x.io b https://y.io/z") == 2
        assert count_urls("no links") == 0

    def test_uppercase_ratio(self):
        assert uppercase_ratio("") == 0.0
        assert uppercase_ratio("ABcd") == 0.5

    def test_clamp_score(self):
        assert clamp_score(-0.2) == 0.0
        assert clamp_score(1.7) == 1.0
        assert clamp_score(0.25 + 0.25 + 0.2) == 0.7

    def test_add_indicator_deduplicates(self):
        indicators: list[str] = []
        add_indicator(indicators, "a")
        add_indicator(indicators, "b")
        add_indicator(indicators, "a")
        assert indicators == ["a", "b"]
