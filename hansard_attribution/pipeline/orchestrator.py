"""Attribution orchestrator - runs every stage for one session transcript.

Stages:
1. Registry construction from the legislator snapshot
2. Header scanning across all pattern forms
3. Resolution, deduplication and numbering of headers
4. Speech segmentation
5. Session statistics (unique-speaker and all-instances passes)
"""

from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

import structlog

from hansard_attribution.config import Settings, get_settings
from hansard_attribution.models import Legislator, SessionMetadata, TranscriptAttribution
from hansard_attribution.processing import (
    ConstituencyMatcher,
    HeaderMatcher,
    InstanceTracker,
    LegislatorRegistry,
    NameMatcher,
    RegistryError,
    SpeakerResolver,
    SpeechStatisticsAggregator,
    segment_speeches,
)

logger = structlog.get_logger(__name__)


class AttributionError(Exception):
    """Unexpected failure while attributing a transcript."""


def attribute_transcript(
    transcript: str,
    legislators: LegislatorRegistry | Iterable[Legislator | Mapping[str, Any]],
    session: SessionMetadata | Mapping[str, Any],
    settings: Optional[Settings] = None,
) -> TranscriptAttribution:
    """Attribute every speech in a session transcript to a legislator.

    Args:
        transcript: Plain text of the session, already extracted from PDF.
        legislators: A built registry, or the legislator snapshot to build one from.
        session: Session id and date.
        settings: Engine settings; the cached environment settings if omitted.

    Returns:
        TranscriptAttribution with position-sorted instances, unmatched
        diagnostics and session statistics. A transcript without any header
        yields an empty, valid result.

    Raises:
        DuplicateIdError: If the snapshot repeats a legislator id.
        AttributionError: If any stage fails unexpectedly.
    """
    settings = settings or get_settings()
    start = datetime.now()

    try:
        session = session if isinstance(session, SessionMetadata) else SessionMetadata.model_validate(session)
        registry = legislators if isinstance(legislators, LegislatorRegistry) else LegislatorRegistry(legislators)
        logger.info(
            "attribution_start",
            session_id=session.session_id,
            transcript_chars=len(transcript),
            legislators=len(registry),
        )

        constituency_matcher = ConstituencyMatcher(registry)
        name_matcher = NameMatcher(
            registry,
            broad_min_score=settings.broad_match_min_score,
            broad_min_shared=settings.broad_match_min_shared_tokens,
        )
        header_matcher = HeaderMatcher(
            chunk_chars=settings.scan_chunk_chars,
            overlap_chars=settings.scan_overlap_chars,
        )
        resolver = SpeakerResolver(
            registry,
            constituency_matcher,
            name_matcher,
            max_suggestions=settings.max_suggestions,
            suggestion_min_score=settings.suggestion_min_score,
            suggestion_min_shared=settings.suggestion_min_shared_tokens,
        )
        aggregator = SpeechStatisticsAggregator(
            registry,
            header_matcher=header_matcher,
            resolver=resolver,
            constituency_matcher=constituency_matcher,
            name_matcher=name_matcher,
            top_speakers_limit=settings.top_speakers_limit,
        )

        matches = header_matcher.scan(transcript)
        tracked = InstanceTracker(resolver).track(matches)
        instances = segment_speeches(transcript, tracked.instances)
        stats = aggregator.session_stats(session, instances, transcript)

        result = TranscriptAttribution(
            session=session,
            instances=instances,
            unmatched=tracked.unmatched,
            stats=stats,
            transcript_length=len(transcript),
        )
    except RegistryError:
        raise
    except Exception as e:
        logger.error("attribution_failed", error=str(e), type=type(e).__name__)
        raise AttributionError(f"Attribution failed: {e}") from e

    logger.info(
        "attribution_complete",
        session_id=session.session_id,
        duration_seconds=round((datetime.now() - start).total_seconds(), 3),
        header_matches=len(matches),
        instances=len(result.instances),
        unique_speakers=stats.unique_speaker_count,
        unmatched=len(result.unmatched),
    )
    return result
