"""Pydantic data models for the attribution engine."""

from .enums import FailureReason, HeaderForm
from .legislator import Legislator, SessionMetadata
from .speaking import HeaderMatch, ResolvedSpeaker, ResolvedSpeakingInstance, UnmatchedSpeaker
from .statistics import (
    CrossSessionParticipation,
    LegislatorSessionStats,
    SessionSpeechStats,
    SpeakerStatistic,
)
from .attribution import TranscriptAttribution

__all__ = [
    # Enums
    "HeaderForm",
    "FailureReason",
    # Registry input
    "Legislator",
    "SessionMetadata",
    # Speaking
    "HeaderMatch",
    "ResolvedSpeaker",
    "ResolvedSpeakingInstance",
    "UnmatchedSpeaker",
    # Statistics
    "SpeakerStatistic",
    "SessionSpeechStats",
    "CrossSessionParticipation",
    "LegislatorSessionStats",
    # Result
    "TranscriptAttribution",
]
