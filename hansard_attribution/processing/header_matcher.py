"""Speaker-header detection across the textual forms used in Hansard.

Each form is scanned independently over the whole transcript. Scanning walks
fixed-size core chunks, each widened by an overlap window on both sides; a
match is kept only by the chunk whose core holds its start, so a header that
straddles a chunk boundary is still found exactly once.
"""

import re
from bisect import bisect_right
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

import structlog

from hansard_attribution.models import HeaderForm, HeaderMatch

logger = structlog.get_logger(__name__)

DEFAULT_CHUNK_CHARS = 50_000
DEFAULT_OVERLAP_CHARS = 2_000

_APOS = "['’]"

# Titles that open a form-2 header: "Tuan Name (Constituency):"
_PAREN_TITLES = (
    r"Tuan|Puan|Yang\s+Berhormat|Y\.\s?Bhg\.|Datuk|Dato" + _APOS
    + r"|Tan\s+Sri|Toh\s+Puan|YB|Dr\.?|Senator|Kapten|Ir\.|Ts\."
)

# Titles that open a form-5 header: "Menteri Name:"
_SPEAKING_TITLES = (
    r"Timbalan\s+Menteri|Menteri|Datuk\s+Seri|Dato" + _APOS + r"\s+Sri|Datuk|Dato" + _APOS
    + r"|Tan\s+Sri|Toh\s+Puan|Tuan|Puan|Dr\.?|Yang\s+Berhormat|Y\.\s?Bhg\.|YB"
)

# Abbreviations whose trailing period does not end a sentence.
_ABBREVIATIONS = frozenset({"dr", "y.bhg", "bhg", "ir", "ts", "hj", "prof", "kpt", "mohd", "muhd", "no"})
_INITIALS_RE = re.compile(r"^[a-z](\.[a-z])*$")
_SENTENCE_BREAK_RE = re.compile(r"(\S*?)[.!?;]\s+(?=\S)")
_TITLE_TOKEN_RE = re.compile(rf"\b(?:{_SPEAKING_TITLES})(?=\s)", re.IGNORECASE)
_PATRONYMIC_END_RE = re.compile(r"\b(?:bin|binti|bt|a/l|a/p)\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class HeaderPattern:
    """A header form paired with the regex that detects it."""

    form: HeaderForm
    regex: re.Pattern
    trims_leading_sentence: bool = False

    @property
    def priority(self) -> int:
        return self.form.priority


HEADER_PATTERNS: tuple[HeaderPattern, ...] = tuple(
    sorted(
        (
            HeaderPattern(
                HeaderForm.NAME_BRACKET_CONSTITUENCY,
                re.compile(r"([^\[\n]+?)\s*\[([^\]]+)\]\s*:", re.IGNORECASE),
                trims_leading_sentence=True,
            ),
            HeaderPattern(
                HeaderForm.TITLE_NAME_PAREN_CONSTITUENCY,
                re.compile(
                    rf"\b(?:{_PAREN_TITLES})\s+([^(:\[]+?)\s*\(([^)]+)\)\s*:",
                    re.IGNORECASE,
                ),
            ),
            HeaderPattern(
                HeaderForm.BRACKETED_PAIR,
                re.compile(r"^\[([^\]\n]{1,60})\s*[-–]\s*([^\]\n]{1,60})\]:", re.MULTILINE),
            ),
            HeaderPattern(
                HeaderForm.NAME_PAREN_CONSTITUENCY,
                re.compile(r"^([A-Z][^(:\[\n]+?)\s*\(([^)]+)\)\s*:", re.MULTILINE),
            ),
            HeaderPattern(
                HeaderForm.TITLE_NAME,
                re.compile(
                    rf"\b(?:{_SPEAKING_TITLES})\s+(?:Haji|Hajjah)?\s*([^:]{{10,80}}):\s+",
                    re.IGNORECASE,
                ),
            ),
        ),
        key=lambda p: p.priority,
    )
)

PATTERNS_BY_FORM: dict[HeaderForm, HeaderPattern] = {p.form: p for p in HEADER_PATTERNS}


def _header_offset(text: str) -> int:
    """Offset of the header proper inside a capture that swallowed prior text."""
    offset = 0
    for match in _SENTENCE_BREAK_RE.finditer(text):
        token = match.group(1).lower().strip("'\"")
        if token in _ABBREVIATIONS or _INITIALS_RE.match(token):
            continue
        offset = match.end()
    while offset < len(text) and text[offset].isspace():
        offset += 1
    return offset + _title_run_offset(text[offset:])


def _title_run_offset(text: str) -> int:
    """Offset of the last run of adjacent titles, or 0 when there is none.

    A run directly after ``bin``/``binti`` belongs to a patronymic and is
    part of the name.
    """
    offset = 0
    run_end: Optional[int] = None
    for match in _TITLE_TOKEN_RE.finditer(text):
        adjacent = run_end is not None and not text[run_end:match.start()].strip()
        if not adjacent and not _PATRONYMIC_END_RE.search(text, 0, match.start()):
            offset = match.start()
        run_end = match.end()
    return offset


class HeaderMatcher:
    """Scan transcripts for speaker headers.

    Args:
        patterns: Header patterns, scanned in priority order.
        chunk_chars: Size of each core chunk.
        overlap_chars: Context added on both sides of every chunk. Headers
            longer than this may be missed or duplicated at chunk edges.
    """

    def __init__(
        self,
        patterns: Sequence[HeaderPattern] = HEADER_PATTERNS,
        chunk_chars: int = DEFAULT_CHUNK_CHARS,
        overlap_chars: int = DEFAULT_OVERLAP_CHARS,
    ):
        if chunk_chars < 1:
            raise ValueError("chunk_chars must be positive")
        if overlap_chars < 0:
            raise ValueError("overlap_chars must not be negative")
        self._patterns = sorted(patterns, key=lambda p: p.priority)
        self._chunk_chars = chunk_chars
        self._overlap_chars = overlap_chars

    def scan(self, transcript: str) -> list[HeaderMatch]:
        """Apply every pattern form to ``transcript``.

        Returns:
            All matches, grouped by form in priority order and ordered by
            position within each form. The same header may appear once per
            form that matched it.
        """
        line_starts = _line_starts(transcript)
        matches: list[HeaderMatch] = []
        for pattern in self._patterns:
            found = list(self._scan_pattern(transcript, pattern, line_starts))
            logger.debug("header_form_scanned", form=pattern.form.value, matches=len(found))
            matches.extend(found)

        logger.info(
            "header_scan_complete",
            transcript_chars=len(transcript),
            chunks=self.chunk_count(transcript),
            matches=len(matches),
        )
        return matches

    def scan_form(self, transcript: str, form: HeaderForm) -> list[HeaderMatch]:
        """Apply a single pattern form to ``transcript``."""
        pattern = next((p for p in self._patterns if p.form == form), None)
        if pattern is None:
            return []
        return list(self._scan_pattern(transcript, pattern, _line_starts(transcript)))

    def chunk_count(self, transcript: str) -> int:
        """Number of core chunks ``transcript`` is scanned in."""
        return max(1, -(-len(transcript) // self._chunk_chars))

    def _windows(self, length: int) -> Iterable[tuple[int, int, int, int]]:
        """Yield ``(core_start, core_end, scan_start, scan_end)`` per chunk."""
        for core_start in range(0, max(length, 1), self._chunk_chars):
            core_end = min(core_start + self._chunk_chars, length)
            yield (
                core_start,
                core_end,
                max(0, core_start - self._overlap_chars),
                min(length, core_end + self._overlap_chars),
            )

    def _scan_pattern(
        self,
        transcript: str,
        pattern: HeaderPattern,
        line_starts: list[int],
    ) -> Iterable[HeaderMatch]:
        for core_start, core_end, scan_start, scan_end in self._windows(len(transcript)):
            for match in pattern.regex.finditer(transcript, scan_start, scan_end):
                if match.end() <= core_start:
                    continue
                header = _build_match(transcript, match, pattern, line_starts)
                if header is not None and core_start <= header.position < core_end:
                    yield header


def _build_match(
    transcript: str,
    match: re.Match,
    pattern: HeaderPattern,
    line_starts: list[int],
) -> Optional[HeaderMatch]:
    start = match.start()
    candidate_a = match.group(1)
    if pattern.trims_leading_sentence:
        offset = _header_offset(candidate_a)
        start = match.start(1) + offset
        candidate_a = candidate_a[offset:]
    if not candidate_a.strip() or start >= match.end():
        return None

    candidate_b = match.group(2) if (match.re.groups or 0) >= 2 else None
    return HeaderMatch(
        position=start,
        length=match.end() - start,
        raw_text=transcript[start:match.end()],
        candidate_a=candidate_a,
        candidate_b=candidate_b,
        form=pattern.form,
        line_number=bisect_right(line_starts, start),
    )


def _line_starts(text: str) -> list[int]:
    starts = [0]
    starts.extend(i + 1 for i, char in enumerate(text) if char == "\n")
    return starts
