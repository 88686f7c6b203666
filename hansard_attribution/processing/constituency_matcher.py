"""Resolve raw constituency strings to legislators."""

from typing import Mapping, Optional

import structlog

from hansard_attribution.config.vocabulary import CONSTITUENCY_OVERRIDES
from hansard_attribution.models import Legislator

from .normalizer import normalize_constituency
from .registry import LegislatorRegistry

logger = structlog.get_logger(__name__)


class ConstituencyMatcher:
    """Constituency lookup against a closed vocabulary.

    Curated spelling overrides are consulted first, then the registry's exact
    constituency index. There is no fuzzy fallback: an unknown constituency
    is logged and yields ``None``.
    """

    def __init__(
        self,
        registry: LegislatorRegistry,
        overrides: Optional[Mapping[str, str]] = None,
    ):
        self._registry = registry
        self._overrides: dict[str, str] = {}

        source = CONSTITUENCY_OVERRIDES if overrides is None else overrides
        for variant, official in source.items():
            legislator = registry.find_by_constituency(normalize_constituency(official))
            if legislator:
                self._overrides[normalize_constituency(variant)] = legislator.id

    def find(self, raw_constituency: str) -> Optional[Legislator]:
        """Return the legislator holding ``raw_constituency``, quietly."""
        normalized = normalize_constituency(raw_constituency)
        if not normalized:
            return None
        override_id = self._overrides.get(normalized)
        if override_id:
            return self._registry.get(override_id)
        return self._registry.find_by_constituency(normalized)

    def match(self, raw_constituency: str) -> Optional[str]:
        """Return the id of the legislator for ``raw_constituency``, or ``None``."""
        legislator = self.find(raw_constituency)
        if legislator is None:
            logger.info("constituency_unmatched", constituency=raw_constituency)
            return None
        return legislator.id
