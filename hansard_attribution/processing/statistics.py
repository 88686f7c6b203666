"""Per-session and cross-session speech statistics.

Two counting passes answer two different questions and both are kept:

- The unique-speaker pass ("who spoke") comes from the tracked instances.
- The all-instances pass ("how often") re-scans the whole transcript with
  the title-only header form, which also catches repeat speeches whose
  headers dropped the constituency. It over-counts on purpose.
"""

from collections import Counter
from datetime import date
from typing import Iterable, Optional, Sequence

import structlog

from hansard_attribution.models import (
    CrossSessionParticipation,
    HeaderForm,
    Legislator,
    LegislatorSessionStats,
    ResolvedSpeakingInstance,
    SessionMetadata,
    SessionSpeechStats,
    SpeakerStatistic,
)

from .constituency_matcher import ConstituencyMatcher
from .header_matcher import HeaderMatcher
from .name_matcher import NameMatcher
from .normalizer import normalize
from .registry import LegislatorRegistry
from .speaker_resolver import SpeakerResolver

logger = structlog.get_logger(__name__)

DEFAULT_TOP_SPEAKERS = 10


def is_eligible(legislator: Legislator, session_date: date) -> bool:
    """Whether a session falls inside a legislator's eligibility window."""
    return session_date >= legislator.sworn_in_date


class SpeechStatisticsAggregator:
    """Compute speech statistics for single transcripts.

    Args:
        registry: Legislator snapshot for this parse.
        header_matcher: Scanner used for the all-instances pass.
        resolver: Resolver whose group classification and officials filter
            the all-instances pass shares.
        constituency_matcher: Constituency lookup for the all-instances pass.
        name_matcher: Name lookup for the all-instances pass.
        top_speakers_limit: Length of ``top_speakers``.
    """

    def __init__(
        self,
        registry: LegislatorRegistry,
        header_matcher: Optional[HeaderMatcher] = None,
        resolver: Optional[SpeakerResolver] = None,
        constituency_matcher: Optional[ConstituencyMatcher] = None,
        name_matcher: Optional[NameMatcher] = None,
        top_speakers_limit: int = DEFAULT_TOP_SPEAKERS,
    ):
        self._registry = registry
        self._headers = header_matcher or HeaderMatcher()
        self._constituencies = constituency_matcher or ConstituencyMatcher(registry)
        self._names = name_matcher or NameMatcher(registry)
        self._resolver = resolver or SpeakerResolver(
            registry, self._constituencies, self._names
        )
        self._top_speakers_limit = top_speakers_limit

    def broad_counts(self, transcript: str) -> dict[str, int]:
        """Tally title-only header matches per legislator across the whole transcript."""
        counts: Counter[str] = Counter()
        unresolved = 0

        for match in self._headers.scan_form(transcript, HeaderForm.TITLE_NAME):
            candidate = self._resolver.classify(match)
            if not normalize(candidate.name) or self._resolver.is_official(candidate.name):
                continue
            if candidate.role and self._resolver.is_official(candidate.role):
                continue

            legislator = None
            if candidate.constituency:
                legislator = self._constituencies.find(candidate.constituency)
            if legislator is None:
                legislator = self._names.broad(candidate.name)

            if legislator is None:
                unresolved += 1
            else:
                counts[legislator.id] += 1

        logger.debug(
            "broad_pass_complete",
            legislators=len(counts),
            matches=sum(counts.values()),
            unresolved=unresolved,
        )
        return dict(counts)

    def session_stats(
        self,
        session: SessionMetadata,
        instances: Sequence[ResolvedSpeakingInstance],
        transcript: str,
        broad_counts: Optional[dict[str, int]] = None,
    ) -> SessionSpeechStats:
        """Reconcile both counting passes into session statistics.

        Only legislators with at least one tracked instance are counted. Their
        total is the all-instances count, raised to 1 when that pass found
        nothing for them.

        Args:
            session: Session the transcript belongs to.
            instances: Tracked instances sorted by header position.
            transcript: Full transcript text.
            broad_counts: Precomputed all-instances tallies, if available.

        Returns:
            SessionSpeechStats with speakers in speaking order and the top
            speakers by total speeches.
        """
        if broad_counts is None:
            broad_counts = self.broad_counts(transcript)

        speaker_stats: list[SpeakerStatistic] = []
        seen: set[str] = set()
        for instance in instances:
            if instance.legislator_id in seen:
                continue
            seen.add(instance.legislator_id)
            speaker_stats.append(
                SpeakerStatistic(
                    legislator_id=instance.legislator_id,
                    legislator_name=instance.legislator_name,
                    total_speeches=max(broad_counts.get(instance.legislator_id, 0), 1),
                    speaking_order=instance.session_speaking_order,
                )
            )

        per_legislator_counts = {s.legislator_id: s.total_speeches for s in speaker_stats}
        top_speakers = sorted(speaker_stats, key=lambda s: (-s.total_speeches, s.speaking_order))

        stats = SessionSpeechStats(
            session_id=session.session_id,
            session_date=session.session_date,
            unique_speaker_count=len(speaker_stats),
            total_speech_instances=sum(per_legislator_counts.values()),
            per_legislator_counts=per_legislator_counts,
            top_speakers=top_speakers[: self._top_speakers_limit],
            speaker_stats=speaker_stats,
        )
        logger.info(
            "session_stats_computed",
            session_id=session.session_id,
            unique_speakers=stats.unique_speaker_count,
            total_speeches=stats.total_speech_instances,
        )
        return stats

    def legislator_speech_stats(
        self,
        legislator_id: str,
        instances: Sequence[ResolvedSpeakingInstance],
        transcript: str,
        broad_counts: Optional[dict[str, int]] = None,
    ) -> LegislatorSessionStats:
        """Summarize one legislator's speeches in one transcript."""
        first = next((i for i in instances if i.legislator_id == legislator_id), None)
        if first is None:
            return LegislatorSessionStats(legislator_id=legislator_id)

        if broad_counts is None:
            broad_counts = self.broad_counts(transcript)
        return LegislatorSessionStats(
            legislator_id=legislator_id,
            spoke=True,
            total_speeches=max(broad_counts.get(legislator_id, 0), 1),
            speaking_order=first.session_speaking_order,
        )


def aggregate_participation(
    legislators: Iterable[Legislator],
    sessions: Iterable[SessionSpeechStats],
) -> dict[str, CrossSessionParticipation]:
    """Replay session statistics into per-legislator participation.

    A session only counts for a legislator when it is dated on or after the
    legislator's ``sworn_in_date``; that covers both the speeches credited
    and the eligible sessions the participation rate is measured against.

    Args:
        legislators: Legislators to report on.
        sessions: Statistics of every session to include.

    Returns:
        Mapping of legislator id to CrossSessionParticipation.
    """
    legislators = list(legislators)
    sessions = list(sessions)
    known = {legislator.id for legislator in legislators}

    unknown = {
        legislator_id
        for stats in sessions
        for legislator_id in stats.per_legislator_counts
        if legislator_id not in known
    }
    if unknown:
        logger.warning("participation_unknown_legislators", legislator_ids=sorted(unknown))

    participation: dict[str, CrossSessionParticipation] = {}
    for legislator in legislators:
        eligible = 0
        sessions_spoke = 0
        total_speeches = 0
        for stats in sessions:
            if not is_eligible(legislator, stats.session_date):
                continue
            eligible += 1
            count = stats.per_legislator_counts.get(legislator.id, 0)
            if count > 0:
                sessions_spoke += 1
                total_speeches += count

        participation[legislator.id] = CrossSessionParticipation(
            sessions_spoke=sessions_spoke,
            total_speeches=total_speeches,
            average_speeches=total_speeches / sessions_spoke if sessions_spoke else 0.0,
            participation_rate=sessions_spoke / eligible * 100 if eligible else 0.0,
            eligible_sessions=eligible,
        )

    logger.info(
        "participation_aggregated",
        legislators=len(participation),
        sessions=len(sessions),
    )
    return participation
