"""Models for the canonical legislator snapshot and session metadata."""

from datetime import date

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Legislator(BaseModel):
    """Canonical member-of-parliament record.

    Accepts the keys used by the persistence layer (``name``, ``swornInDate``)
    as well as the field names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1, description="Stable legislator identifier")
    canonical_name: str = Field(
        ...,
        validation_alias=AliasChoices("canonical_name", "name", "canonicalName"),
        description="Official name as held in the registry",
    )
    constituency: str = Field(..., description="Official constituency name")
    sworn_in_date: date = Field(
        ...,
        validation_alias=AliasChoices("sworn_in_date", "swornInDate"),
        description="First date the legislator may accrue participation credit",
    )


class SessionMetadata(BaseModel):
    """Identity of the sitting a transcript belongs to."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    session_id: str = Field(
        ...,
        validation_alias=AliasChoices("session_id", "sessionId"),
        description="Session identifier, e.g. DR.23.10.2025",
    )
    session_date: date = Field(
        ...,
        validation_alias=AliasChoices("session_date", "sessionDate"),
        description="Date of the sitting",
    )
