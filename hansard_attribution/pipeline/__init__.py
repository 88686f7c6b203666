"""Transcript attribution pipeline."""

from .orchestrator import AttributionError, attribute_transcript

__all__ = ["AttributionError", "attribute_transcript"]
