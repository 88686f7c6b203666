"""Aggregate result of attributing one transcript."""

from pydantic import BaseModel, Field

from .legislator import SessionMetadata
from .speaking import ResolvedSpeakingInstance, UnmatchedSpeaker
from .statistics import SessionSpeechStats


class TranscriptAttribution(BaseModel):
    """Everything the engine produces for one session transcript."""

    session: SessionMetadata
    instances: list[ResolvedSpeakingInstance] = Field(
        default_factory=list, description="Speaking instances sorted by header position"
    )
    unmatched: list[UnmatchedSpeaker] = Field(
        default_factory=list, description="Headers left for human review"
    )
    stats: SessionSpeechStats
    transcript_length: int = Field(default=0, ge=0)
