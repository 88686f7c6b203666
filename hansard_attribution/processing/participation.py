"""Cumulative cross-session participation with all-or-nothing increments."""

import threading
from dataclasses import dataclass

import structlog

from hansard_attribution.models import CrossSessionParticipation, SessionSpeechStats

from .registry import LegislatorNotFoundError, LegislatorRegistry
from .statistics import is_eligible

logger = structlog.get_logger(__name__)


@dataclass
class _Tally:
    sessions_spoke: int = 0
    total_speeches: int = 0
    eligible_sessions: int = 0


class ParticipationLedger:
    """Running participation totals for every legislator in a registry.

    Sessions may be parsed concurrently, but each session's increments are
    applied under one lock and only after every referenced legislator id has
    been validated, so a failed application leaves the ledger untouched and
    can be retried. A session id is applied at most once.
    """

    def __init__(self, registry: LegislatorRegistry):
        self._registry = registry
        self._lock = threading.Lock()
        self._tallies: dict[str, _Tally] = {legislator.id: _Tally() for legislator in registry}
        self._applied: set[str] = set()

    def apply_session(self, stats: SessionSpeechStats) -> bool:
        """Add one session's counts to the ledger.

        Args:
            stats: Statistics of a parsed session.

        Returns:
            True if applied, False if the session was already applied.

        Raises:
            LegislatorNotFoundError: If any counted legislator is not in the
                registry. Nothing is applied in that case.
        """
        missing = self._registry.missing_ids(stats.per_legislator_counts)
        if missing:
            logger.error(
                "participation_apply_rejected",
                session_id=stats.session_id,
                missing=sorted(missing),
            )
            raise LegislatorNotFoundError(missing)

        with self._lock:
            if stats.session_id in self._applied:
                logger.warning("participation_session_already_applied", session_id=stats.session_id)
                return False

            credited = 0
            for legislator in self._registry:
                if not is_eligible(legislator, stats.session_date):
                    continue
                tally = self._tallies[legislator.id]
                tally.eligible_sessions += 1
                count = stats.per_legislator_counts.get(legislator.id, 0)
                if count > 0:
                    tally.sessions_spoke += 1
                    tally.total_speeches += count
                    credited += 1
            self._applied.add(stats.session_id)

        ineligible = [
            legislator_id
            for legislator_id in stats.per_legislator_counts
            if not is_eligible(self._registry.get(legislator_id), stats.session_date)
        ]
        if ineligible:
            logger.info(
                "participation_ineligible_speakers",
                session_id=stats.session_id,
                legislator_ids=ineligible,
            )
        logger.info("participation_session_applied", session_id=stats.session_id, credited=credited)
        return True

    def participation(self, legislator_id: str) -> CrossSessionParticipation:
        """Current participation of one legislator."""
        if legislator_id not in self._tallies:
            raise LegislatorNotFoundError([legislator_id])
        with self._lock:
            tally = _Tally(**vars(self._tallies[legislator_id]))
        return _to_participation(tally)

    def snapshot(self) -> dict[str, CrossSessionParticipation]:
        """Participation of every legislator at a single point in time."""
        with self._lock:
            tallies = {i: _Tally(**vars(t)) for i, t in self._tallies.items()}
        return {i: _to_participation(t) for i, t in tallies.items()}

    @property
    def applied_sessions(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._applied)


def _to_participation(tally: _Tally) -> CrossSessionParticipation:
    spoke = tally.sessions_spoke
    return CrossSessionParticipation(
        sessions_spoke=spoke,
        total_speeches=tally.total_speeches,
        average_speeches=tally.total_speeches / spoke if spoke else 0.0,
        participation_rate=spoke / tally.eligible_sessions * 100 if tally.eligible_sessions else 0.0,
        eligible_sessions=tally.eligible_sessions,
    )
