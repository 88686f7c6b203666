"""Token-overlap scoring between a candidate name and registry names."""

from typing import NamedTuple, Sequence

from rapidfuzz import fuzz

from hansard_attribution.config.thresholds import (
    BROAD_MATCH_MIN_SCORE,
    BROAD_MATCH_MIN_SHARED_TOKENS,
    SUGGESTION_MIN_SCORE,
    SUGGESTION_MIN_SHARED_TOKENS,
)


class OverlapScore(NamedTuple):
    """Result of comparing two token lists."""

    shared: int
    score: float


def token_overlap(candidate_tokens: Sequence[str], registry_tokens: Sequence[str]) -> OverlapScore:
    """Score two token lists as ``shared / max(len(candidate), len(registry))``.

    Shared tokens are counted over the distinct candidate tokens, so a
    repeated word is not credited twice.

    Args:
        candidate_tokens: Tokens of the extracted name.
        registry_tokens: Tokens of a registry name.

    Returns:
        OverlapScore with the shared-token count and the ratio in [0, 1].
    """
    denominator = max(len(candidate_tokens), len(registry_tokens))
    if denominator == 0:
        return OverlapScore(0, 0.0)
    registry_set = set(registry_tokens)
    shared = sum(1 for token in set(candidate_tokens) if token in registry_set)
    return OverlapScore(shared, shared / denominator)


def passes(overlap: OverlapScore, min_score: float, min_shared: int) -> bool:
    """Whether an overlap clears both the score and shared-token thresholds."""
    return overlap.shared >= min_shared and overlap.score >= min_score


def is_suggestion(
    overlap: OverlapScore,
    min_score: float = SUGGESTION_MIN_SCORE,
    min_shared: int = SUGGESTION_MIN_SHARED_TOKENS,
) -> bool:
    """Whether an overlap is strong enough to suggest for human review."""
    return passes(overlap, min_score, min_shared)


def is_broad_match(
    overlap: OverlapScore,
    min_score: float = BROAD_MATCH_MIN_SCORE,
    min_shared: int = BROAD_MATCH_MIN_SHARED_TOKENS,
) -> bool:
    """Whether an overlap is strong enough to credit a broad-pass speech."""
    return passes(overlap, min_score, min_shared)


def string_similarity(left: str, right: str) -> float:
    """Order-insensitive similarity in [0, 100], used only to break score ties."""
    return fuzz.token_sort_ratio(left, right)
