"""Models for per-session and cross-session speech statistics."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SpeakerStatistic(BaseModel):
    """Speech tally for one legislator in one session."""

    model_config = ConfigDict(frozen=True)

    legislator_id: str
    legislator_name: str
    total_speeches: int = Field(..., ge=1, description="Broad-pass count, at least 1")
    speaking_order: int = Field(..., ge=1)


class SessionSpeechStats(BaseModel):
    """Statistics for one session transcript."""

    model_config = ConfigDict(frozen=True)

    session_id: str
    session_date: date
    unique_speaker_count: int = Field(..., ge=0)
    total_speech_instances: int = Field(..., ge=0)
    per_legislator_counts: dict[str, int] = Field(default_factory=dict)
    top_speakers: list[SpeakerStatistic] = Field(default_factory=list)
    speaker_stats: list[SpeakerStatistic] = Field(
        default_factory=list, description="All speakers in speaking order"
    )


class CrossSessionParticipation(BaseModel):
    """Participation of one legislator across many sessions."""

    sessions_spoke: int = Field(default=0, ge=0)
    total_speeches: int = Field(default=0, ge=0)
    average_speeches: float = Field(default=0.0, ge=0)
    participation_rate: float = Field(default=0.0, ge=0, description="Percentage of eligible sessions")
    eligible_sessions: int = Field(default=0, ge=0)


class LegislatorSessionStats(BaseModel):
    """Speech summary of a single legislator within a single transcript."""

    legislator_id: str
    spoke: bool = False
    total_speeches: int = Field(default=0, ge=0)
    speaking_order: Optional[int] = None
