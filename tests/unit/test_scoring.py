"""Unit tests for token-overlap scoring and name matching."""

from datetime import date

import pytest

from hansard_attribution.models import Legislator
from hansard_attribution.processing import LegislatorRegistry, NameMatcher
from hansard_attribution.processing.scoring import (
    OverlapScore,
    is_broad_match,
    is_suggestion,
    token_overlap,
)


class TestTokenOverlap:
    """Tests for token_overlap and its thresholds."""

    def test_identical(self):
        assert token_overlap(["anwar", "ibrahim"], ["anwar", "ibrahim"]) == OverlapScore(2, 1.0)

    def test_divides_by_longer_list(self):
        overlap = token_overlap(["ahmad"], ["ahmad", "zahid", "hamidi"])
        assert overlap.shared == 1
        assert overlap.score == pytest.approx(1 / 3)

    def test_repeated_candidate_token_counted_once(self):
        assert token_overlap(["lim", "lim"], ["lim", "guan", "eng"]).shared == 1

    def test_empty(self):
        assert token_overlap([], []) == OverlapScore(0, 0.0)

    def test_suggestion_threshold(self):
        assert is_suggestion(OverlapScore(1, 0.3))
        assert not is_suggestion(OverlapScore(1, 0.29))
        assert not is_suggestion(OverlapScore(0, 0.5))

    def test_broad_match_threshold(self):
        assert is_broad_match(OverlapScore(2, 0.5))
        assert not is_broad_match(OverlapScore(1, 1.0))
        assert not is_broad_match(OverlapScore(2, 0.4))


class TestNameMatcher:
    """Tests for NameMatcher strategies."""

    def test_exact(self, registry):
        matcher = NameMatcher(registry)
        assert matcher.exact("anwar ibrahim").id == "L2"
        assert matcher.exact("ab") is None

    def test_override(self, registry):
        matcher = NameMatcher(registry, overrides={"Anuar bin Ibrahim": "Anwar bin Ibrahim"})
        assert matcher.exact("anuar ibrahim").id == "L2"

    def test_containment_both_directions(self, registry):
        matcher = NameMatcher(registry)
        assert matcher.containment("hannah yeoh").id == "L3"
        assert matcher.containment("lim guan eng pulau pinang").id == "L5"

    def test_containment_requires_whole_words(self, registry):
        assert NameMatcher(registry).containment("yeo") is None

    def test_broad_token_match(self, registry):
        assert NameMatcher(registry).broad("Anwar Ibrahim Putra").id == "L2"

    def test_broad_needs_two_shared_tokens(self, registry):
        assert NameMatcher(registry).broad("Ahmad Ibrahim") is None

    def test_broad_exact_first(self, registry):
        assert NameMatcher(registry).broad("Tuan Wong Chen").id == "L6"

    def test_suggest(self, registry):
        assert NameMatcher(registry).suggest("anwar hamid") == ["L2"]

    def test_suggest_nothing_similar(self, registry):
        assert NameMatcher(registry).suggest("unknown") == []

    def test_suggest_ranking_and_limit(self):
        sworn = date(2022, 12, 19)
        registry = LegislatorRegistry(
            [
                Legislator(id="A", canonical_name="Lim Guan Eng", constituency="Bagan", sworn_in_date=sworn),
                Legislator(id="B", canonical_name="Lim Kit Siang", constituency="Iskandar Puteri", sworn_in_date=sworn),
                Legislator(id="C", canonical_name="Lim Hui Ying", constituency="Tanjong", sworn_in_date=sworn),
                Legislator(id="D", canonical_name="Lim Lip Eng", constituency="Kepong", sworn_in_date=sworn),
            ]
        )
        matcher = NameMatcher(registry)
        suggestions = matcher.suggest("lim kit siang jr")
        assert suggestions[0] == "B"
        assert len(suggestions) == 3
        assert set(suggestions[1:]) <= {"A", "C", "D"}
        assert matcher.suggest("lim kit siang jr", limit=1) == ["B"]

    def test_suggest_full_tie_keeps_registry_order(self):
        sworn = date(2022, 12, 19)
        registry = LegislatorRegistry(
            [
                Legislator(id="Y", canonical_name="Ali Baba", constituency="Kepong", sworn_in_date=sworn),
                Legislator(id="X", canonical_name="Ali Baba", constituency="Bagan", sworn_in_date=sworn),
            ]
        )
        assert NameMatcher(registry).suggest("ali") == ["Y", "X"]
