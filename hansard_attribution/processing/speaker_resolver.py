"""Attribution of a single speaker header to a registry legislator."""

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Union

import structlog

from hansard_attribution.config.thresholds import (
    MAX_SUGGESTIONS,
    SUGGESTION_MIN_SCORE,
    SUGGESTION_MIN_SHARED_TOKENS,
)
from hansard_attribution.config.vocabulary import NON_CONSTITUENCY_ROLES, PARLIAMENTARY_OFFICIALS
from hansard_attribution.models import (
    FailureReason,
    HeaderMatch,
    Legislator,
    ResolvedSpeaker,
    UnmatchedSpeaker,
)

from .constituency_matcher import ConstituencyMatcher
from .name_matcher import NameMatcher
from .normalizer import (
    clean_captured_text,
    contains_phrase,
    normalize,
    normalize_phrase,
    starts_with_phrase,
)
from .registry import LegislatorRegistry

logger = structlog.get_logger(__name__)

Resolution = Union[ResolvedSpeaker, UnmatchedSpeaker]

_TRAILING_CONSTITUENCY_RE = re.compile(r"^(.*?\S)\s*[\[(]([^\[\]()]+)[\])]\s*$", re.DOTALL)


@dataclass(frozen=True)
class SpeakerCandidate:
    """Name and optional constituency read from a header's captured groups."""

    name: str
    constituency: Optional[str] = None
    role: Optional[str] = None


def split_trailing_constituency(text: str) -> tuple[str, Optional[str]]:
    """Split ``"Name [Constituency]"`` or ``"Name (Constituency)"`` into its parts.

    Text without a trailing bracketed group is returned unchanged with no
    constituency.
    """
    match = _TRAILING_CONSTITUENCY_RE.match(text.strip())
    if not match:
        return text.strip(), None
    return match.group(1).strip(), match.group(2).strip()


def classify_failure(constituency: Optional[str], constituency_recognized: bool) -> FailureReason:
    """Pick the diagnostic reason for a header that did not resolve."""
    if not constituency:
        return FailureReason.NAME_NOT_FOUND
    if constituency_recognized:
        return FailureReason.CONSTITUENCY_NAME_MISMATCH
    return FailureReason.CONSTITUENCY_NOT_RECOGNIZED


class SpeakerResolver:
    """Resolve header matches against a legislator registry.

    Resolution priority is constituency first, then exact name, then
    whole-word name containment. Anything else becomes an
    :class:`UnmatchedSpeaker` with ranked suggestions. Chair roles and
    presiding officers are skipped silently.

    Args:
        registry: Legislator snapshot for this parse.
        constituency_matcher: Constituency lookup; built from ``registry`` if omitted.
        name_matcher: Name lookup; built from ``registry`` if omitted.
        non_constituency_roles: Phrases that mark the second group as a role.
        officials: Phrases identifying parliamentary officials.
        max_suggestions: Maximum suggested ids per diagnostic.
        suggestion_min_score: Minimum token-overlap score for a suggestion.
        suggestion_min_shared: Minimum shared tokens for a suggestion.
    """

    def __init__(
        self,
        registry: LegislatorRegistry,
        constituency_matcher: Optional[ConstituencyMatcher] = None,
        name_matcher: Optional[NameMatcher] = None,
        non_constituency_roles: Iterable[str] = NON_CONSTITUENCY_ROLES,
        officials: Iterable[str] = PARLIAMENTARY_OFFICIALS,
        max_suggestions: int = MAX_SUGGESTIONS,
        suggestion_min_score: float = SUGGESTION_MIN_SCORE,
        suggestion_min_shared: int = SUGGESTION_MIN_SHARED_TOKENS,
    ):
        self._registry = registry
        self._constituencies = constituency_matcher or ConstituencyMatcher(registry)
        self._names = name_matcher or NameMatcher(registry)
        self._roles = tuple(normalize_phrase(role) for role in non_constituency_roles)
        self._officials = tuple(normalize_phrase(official) for official in officials)
        self._max_suggestions = max_suggestions
        self._suggestion_min_score = suggestion_min_score
        self._suggestion_min_shared = suggestion_min_shared

    def is_role(self, text: str) -> bool:
        """Whether ``text`` names a role rather than a constituency."""
        phrase = normalize_phrase(text)
        return any(starts_with_phrase(phrase, role) for role in self._roles)

    def is_official(self, text: str) -> bool:
        """Whether ``text`` names a chair role or presiding office-holder."""
        for candidate in {normalize(text), normalize_phrase(text)}:
            if any(contains_phrase(candidate, official) for official in self._officials):
                return True
        return False

    def classify(self, match: HeaderMatch) -> SpeakerCandidate:
        """Decide which captured group is the name and which the constituency."""
        second = clean_captured_text(match.candidate_b) if match.candidate_b else ""

        if not second:
            name, constituency = split_trailing_constituency(match.candidate_a)
            name = clean_captured_text(name)
            if constituency and self.is_role(constituency):
                return SpeakerCandidate(name=name, role=constituency)
            return SpeakerCandidate(name=name, constituency=constituency or None)

        first = clean_captured_text(match.candidate_a)

        if self.is_role(second):
            return SpeakerCandidate(name=first, role=second)
        # Reversed "[Constituency - Name]" headers.
        if self._constituencies.find(first) is not None:
            return SpeakerCandidate(name=second, constituency=first)
        return SpeakerCandidate(name=first, constituency=second)

    def resolve(self, match: HeaderMatch) -> Optional[Resolution]:
        """Resolve one header match.

        Returns:
            A :class:`ResolvedSpeaker`, an :class:`UnmatchedSpeaker`
            diagnostic, or ``None`` when the header is skipped (officials and
            names that normalize to nothing).
        """
        candidate = self.classify(match)
        normalized_name = normalize(candidate.name)

        if not normalized_name:
            logger.debug("header_skipped_empty_name", position=match.position, raw=match.raw_text)
            return None
        if self.is_official(candidate.name) or (candidate.role and self.is_official(candidate.role)):
            logger.debug("header_skipped_official", position=match.position, name=candidate.name)
            return None

        constituency_legislator: Optional[Legislator] = None
        if candidate.constituency:
            legislator_id = self._constituencies.match(candidate.constituency)
            if legislator_id:
                constituency_legislator = self._registry.get(legislator_id)
        if constituency_legislator is not None:
            return self._resolved(constituency_legislator, match, "constituency")

        legislator = self._names.exact(normalized_name)
        if legislator is not None:
            return self._resolved(legislator, match, "exact_name")

        legislator = self._names.containment(normalized_name)
        if legislator is not None:
            return self._resolved(legislator, match, "name_containment")

        return self._unmatched(candidate, normalized_name, match, constituency_legislator)

    def _resolved(self, legislator: Legislator, match: HeaderMatch, method: str) -> ResolvedSpeaker:
        logger.debug(
            "speaker_resolved",
            legislator_id=legislator.id,
            method=method,
            form=match.form.value,
            position=match.position,
        )
        return ResolvedSpeaker(
            legislator_id=legislator.id,
            legislator_name=legislator.canonical_name,
            constituency=legislator.constituency,
            match=match,
        )

    def _unmatched(
        self,
        candidate: SpeakerCandidate,
        normalized_name: str,
        match: HeaderMatch,
        constituency_legislator: Optional[Legislator],
    ) -> UnmatchedSpeaker:
        reason = classify_failure(candidate.constituency, constituency_legislator is not None)
        if constituency_legislator is not None:
            suggestions = [constituency_legislator.id][: self._max_suggestions]
        else:
            suggestions = self._names.suggest(
                normalized_name,
                limit=self._max_suggestions,
                min_score=self._suggestion_min_score,
                min_shared=self._suggestion_min_shared,
            )

        logger.info(
            "speaker_unmatched",
            name=candidate.name,
            constituency=candidate.constituency,
            reason=reason.value,
            suggestions=suggestions,
            line=match.line_number,
        )
        return UnmatchedSpeaker(
            extracted_name=candidate.name,
            extracted_constituency=candidate.constituency,
            failure_reason=reason,
            raw_header_text=match.raw_text,
            suggested_legislator_ids=suggestions,
            header_position=match.position,
        )
