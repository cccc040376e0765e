"""Tests for bit-parallel approximate substring matching."""

from __future__ import annotations

import pytest

from content_manager.utils.fuzzy import FuzzyMatch, best_substring_match


class TestBestSubstringMatch:
    def test_exact_occurrence(self) -> None:
        match = best_substring_match("abc", "xxabcxx")

        assert match == FuzzyMatch(distance=0, start=2, end=5)

    def test_one_deletion(self) -> None:
        match = best_substring_match("typescript", "notes on typscript")

        assert match is not None
        assert match.distance == 1
        assert match.end == 18

    @pytest.mark.parametrize(
        ("pattern", "text", "expected"),
        [
            ("kitten", "kitten", 0),
            ("kitten", "sitten", 1),
            ("kitten", "a sitting cat", 2),
            ("search", "seerch engine", 1),
            ("abcd", "xyz", 4),
        ],
    )
    def test_distances(self, pattern: str, text: str, expected: int) -> None:
        match = best_substring_match(pattern, text)

        assert match is not None
        assert match.distance == expected

    def test_pattern_longer_than_text(self) -> None:
        match = best_substring_match("configuration", "config")

        assert match is not None
        assert match.distance == len("configuration") - len("config")

    def test_case_sensitive(self) -> None:
        match = best_substring_match("abc", "ABC")

        assert match is not None
        assert match.distance == 3

    def test_empty_inputs(self) -> None:
        assert best_substring_match("", "text") is None
        assert best_substring_match("text", "") is None

    def test_long_pattern(self) -> None:
        """Patterns wider than a machine word still work."""
        pattern = "the quick brown fox jumps over the lazy dog and keeps running far away"
        text = f"prefix {pattern.replace('lazy', 'hazy')} suffix"

        match = best_substring_match(pattern, text)

        assert match is not None
        assert match.distance == 1


class TestNormalized:
    def test_scaled_by_pattern_length(self) -> None:
        assert FuzzyMatch(distance=1, start=0, end=4).normalized(4) == 0.25

    def test_capped_at_one(self) -> None:
        assert FuzzyMatch(distance=5, start=0, end=0).normalized(3) == 1.0

    def test_zero_length_pattern(self) -> None:
        assert FuzzyMatch(distance=0, start=0, end=0).normalized(0) == 1.0
