"""Extraction of speech text between consecutive speaker headers."""

import re
from typing import Sequence

import structlog

from hansard_attribution.models import ResolvedSpeakingInstance

logger = structlog.get_logger(__name__)

EMPTY_SPEECH_SENTINEL = "(No speech content captured)"

_TRAILING_LINE_SPACE_RE = re.compile(r"[^\S\n]+\n")
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")


def clean_speech(text: str) -> str:
    """Trim, drop trailing spaces before newlines and cap blank lines at one."""
    text = _TRAILING_LINE_SPACE_RE.sub("\n", text.strip())
    return _EXCESS_NEWLINES_RE.sub("\n\n", text).strip()


def segment_speeches(
    transcript: str,
    instances: Sequence[ResolvedSpeakingInstance],
) -> list[ResolvedSpeakingInstance]:
    """Attach speech text to each instance.

    A speech runs from the end of its header to the start of the next
    instance's header, or to the end of the transcript for the last one.

    Args:
        transcript: Full transcript text the instances were found in.
        instances: Instances sorted by header position.

    Returns:
        New instances with ``speech_text`` set; empty speeches carry
        :data:`EMPTY_SPEECH_SENTINEL`.
    """
    segmented: list[ResolvedSpeakingInstance] = []
    empty = 0

    for index, instance in enumerate(instances):
        start = instance.header_position + instance.header_length
        end = instances[index + 1].header_position if index + 1 < len(instances) else len(transcript)
        speech = clean_speech(transcript[start:end]) if end > start else ""
        if not speech:
            empty += 1
            speech = EMPTY_SPEECH_SENTINEL
        segmented.append(instance.model_copy(update={"speech_text": speech}))

    if empty:
        logger.debug("empty_speeches", count=empty)
    return segmented
