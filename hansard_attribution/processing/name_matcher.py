"""Name-based legislator lookup and suggestion ranking."""

from typing import Mapping, Optional

import structlog

from hansard_attribution.config.thresholds import (
    BROAD_MATCH_MIN_SCORE,
    BROAD_MATCH_MIN_SHARED_TOKENS,
    MAX_SUGGESTIONS,
    MIN_NAME_LENGTH,
    SUGGESTION_MIN_SCORE,
    SUGGESTION_MIN_SHARED_TOKENS,
)
from hansard_attribution.config.vocabulary import NAME_OVERRIDES
from hansard_attribution.models import Legislator

from .normalizer import contains_phrase, normalize, tokenize
from .registry import LegislatorRegistry
from .scoring import is_broad_match, is_suggestion, string_similarity, token_overlap

logger = structlog.get_logger(__name__)


class NameMatcher:
    """Match normalized speaker names to registry legislators.

    Three strategies of decreasing strictness are exposed separately so the
    resolver can apply them in its own priority order:

    - :meth:`exact`: curated spelling overrides, then the registry name index.
    - :meth:`containment`: whole-word containment in either direction.
    - :meth:`broad`: token overlap, used by the all-instances counting pass.
    """

    def __init__(
        self,
        registry: LegislatorRegistry,
        overrides: Optional[Mapping[str, str]] = None,
        broad_min_score: float = BROAD_MATCH_MIN_SCORE,
        broad_min_shared: int = BROAD_MATCH_MIN_SHARED_TOKENS,
    ):
        self._registry = registry
        self._broad_min_score = broad_min_score
        self._broad_min_shared = broad_min_shared
        self._overrides: dict[str, str] = {}

        source = NAME_OVERRIDES if overrides is None else overrides
        for variant, official in source.items():
            legislator = registry.find_by_canonical_name(official)
            if legislator:
                self._overrides[normalize(variant)] = legislator.id

        # Token lists are reused by every broad and suggestion lookup.
        self._tokens: dict[str, list[str]] = {
            legislator.id: tokenize(registry.normalized_name(legislator.id))
            for legislator in registry
        }

    def exact(self, normalized_name: str) -> Optional[Legislator]:
        """Override or exact index match for an already normalized name."""
        if len(normalized_name) < MIN_NAME_LENGTH:
            return None
        override_id = self._overrides.get(normalized_name)
        if override_id:
            return self._registry.get(override_id)
        return self._registry.find_by_name(normalized_name)

    def containment(self, normalized_name: str) -> Optional[Legislator]:
        """First legislator whose normalized name contains, or is contained by, the candidate."""
        if len(normalized_name) < MIN_NAME_LENGTH:
            return None
        for legislator in self._registry:
            registry_name = self._registry.normalized_name(legislator.id)
            if not registry_name:
                continue
            if contains_phrase(registry_name, normalized_name) or contains_phrase(
                normalized_name, registry_name
            ):
                logger.debug(
                    "speaker_fuzzy_matched",
                    candidate=normalized_name,
                    legislator_id=legislator.id,
                    legislator_name=legislator.canonical_name,
                )
                return legislator
        return None

    def broad(self, raw_name: str) -> Optional[Legislator]:
        """Match a raw name by exact lookup, then by best token overlap.

        A token match needs at least ``broad_min_shared`` shared tokens and an
        overlap score of at least ``broad_min_score``.
        """
        normalized = normalize(raw_name)
        exact = self.exact(normalized)
        if exact or len(normalized) < MIN_NAME_LENGTH:
            return exact

        candidate_tokens = tokenize(normalized)
        if not candidate_tokens:
            return None

        best: Optional[Legislator] = None
        best_score = 0.0
        for legislator in self._registry:
            overlap = token_overlap(candidate_tokens, self._tokens[legislator.id])
            if not is_broad_match(overlap, self._broad_min_score, self._broad_min_shared):
                continue
            if overlap.score > best_score:
                best, best_score = legislator, overlap.score
        return best

    def suggest(
        self,
        normalized_name: str,
        limit: int = MAX_SUGGESTIONS,
        min_score: float = SUGGESTION_MIN_SCORE,
        min_shared: int = SUGGESTION_MIN_SHARED_TOKENS,
    ) -> list[str]:
        """Rank legislator ids by token overlap with ``normalized_name``.

        Ties on overlap score are broken by string similarity, then by
        registry order.

        Args:
            normalized_name: Normalized extracted name.
            limit: Maximum number of ids to return.
            min_score: Minimum overlap score to be suggested.
            min_shared: Minimum number of shared tokens to be suggested.

        Returns:
            Up to ``limit`` legislator ids, best first.
        """
        candidate_tokens = tokenize(normalized_name)
        if not candidate_tokens or limit <= 0:
            return []

        scored: list[tuple[float, float, int, str]] = []
        for index, legislator in enumerate(self._registry):
            overlap = token_overlap(candidate_tokens, self._tokens[legislator.id])
            if not is_suggestion(overlap, min_score, min_shared):
                continue
            similarity = string_similarity(
                normalized_name, self._registry.normalized_name(legislator.id)
            )
            scored.append((-overlap.score, -similarity, index, legislator.id))

        scored.sort()
        return [legislator_id for *_, legislator_id in scored[:limit]]
