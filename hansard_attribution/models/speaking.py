"""Models for header detection, resolution and speaking instances."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import FailureReason, HeaderForm


class HeaderMatch(BaseModel):
    """Raw output of a header pattern scan, before resolution."""

    model_config = ConfigDict(frozen=True)

    position: int = Field(..., ge=0, description="Absolute character offset of the header")
    length: int = Field(..., ge=1, description="Length of the matched header text")
    raw_text: str = Field(..., description="Header text exactly as matched")
    candidate_a: str = Field(..., description="First captured group")
    candidate_b: Optional[str] = Field(None, description="Second captured group, if the form has one")
    form: HeaderForm = Field(..., description="Pattern form that produced the match")
    line_number: int = Field(default=1, ge=1, description="1-based line of the header")


class ResolvedSpeaker(BaseModel):
    """A header successfully attributed to a registry legislator."""

    model_config = ConfigDict(frozen=True)

    legislator_id: str
    legislator_name: str
    constituency: str = Field(..., description="Registry constituency, not the extracted string")
    match: HeaderMatch


class ResolvedSpeakingInstance(BaseModel):
    """One attributed speech in a session transcript."""

    model_config = ConfigDict(frozen=True)

    legislator_id: str
    legislator_name: str
    constituency: str
    session_speaking_order: int = Field(
        ..., ge=1, description="Rank of the legislator's first appearance in the session"
    )
    instance_number_for_legislator: int = Field(
        ..., ge=1, description="1-based count of this legislator's appearances so far"
    )
    header_position: int = Field(..., ge=0)
    header_length: int = Field(..., ge=1)
    line_number: int = Field(default=1, ge=1)
    captured_header: str = Field(..., description="Stripped header text")
    header_form: HeaderForm
    speech_text: Optional[str] = Field(
        None, description="Speech content; None until segmentation has run"
    )


class UnmatchedSpeaker(BaseModel):
    """Diagnostic for a header that could not be attributed."""

    model_config = ConfigDict(frozen=True)

    extracted_name: str
    extracted_constituency: Optional[str] = None
    failure_reason: FailureReason
    raw_header_text: str
    suggested_legislator_ids: list[str] = Field(default_factory=list, max_length=3)
    order: int = Field(
        default=0, ge=0, description="Session speaking-order counter where the header occurred"
    )
    header_position: int = Field(default=0, ge=0)
