"""Speaker attribution processing stages."""

from .constituency_matcher import ConstituencyMatcher
from .header_matcher import HEADER_PATTERNS, HeaderMatcher, HeaderPattern
from .instance_tracker import InstanceTracker, TrackingResult
from .name_matcher import NameMatcher
from .normalizer import normalize, normalize_constituency
from .participation import ParticipationLedger
from .registry import (
    DuplicateIdError,
    LegislatorNotFoundError,
    LegislatorRegistry,
    RegistryError,
)
from .scoring import OverlapScore, token_overlap
from .segmenter import EMPTY_SPEECH_SENTINEL, segment_speeches
from .speaker_resolver import SpeakerCandidate, SpeakerResolver
from .statistics import SpeechStatisticsAggregator, aggregate_participation, is_eligible

__all__ = [
    # Registry
    "LegislatorRegistry",
    "RegistryError",
    "DuplicateIdError",
    "LegislatorNotFoundError",
    # Normalization and scoring
    "normalize",
    "normalize_constituency",
    "OverlapScore",
    "token_overlap",
    # Matching
    "ConstituencyMatcher",
    "NameMatcher",
    "HeaderMatcher",
    "HeaderPattern",
    "HEADER_PATTERNS",
    "SpeakerResolver",
    "SpeakerCandidate",
    # Tracking and segmentation
    "InstanceTracker",
    "TrackingResult",
    "segment_speeches",
    "EMPTY_SPEECH_SENTINEL",
    # Statistics
    "SpeechStatisticsAggregator",
    "aggregate_participation",
    "is_eligible",
    "ParticipationLedger",
]
