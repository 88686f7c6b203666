"""Canonicalization of names and constituencies for comparison.

Every function here is pure and idempotent: feeding a result back in returns
it unchanged.
"""

import re
from typing import Iterable, Sequence

from hansard_attribution.config.thresholds import MIN_TOKEN_LENGTH
from hansard_attribution.config.vocabulary import HONORIFICS, NAME_PARTICLES

# Punctuation that never carries meaning in a name. Apostrophes (dato') and
# slashes (a/l) are kept because they are part of tokens.
_NAME_PUNCTUATION_RE = re.compile(r"[\[\](){}<>.,;:!?\"“”\-–—_@*#|=+]")
_APOSTROPHE_RE = re.compile(r"[‘’`´]")
_CONSTITUENCY_STRIP_RE = re.compile(r"[^a-z0-9\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def _phrases(values: Iterable[str]) -> tuple[tuple[str, ...], ...]:
    """Split phrases into token tuples, longest first so compounds win."""
    unique = {tuple(v.split()) for v in values if v.strip()}
    return tuple(sorted(unique, key=lambda p: (-len(p), p)))


_DEFAULT_STRIP_PHRASES = _phrases(HONORIFICS + NAME_PARTICLES)


def _name_tokens(text: str) -> list[str]:
    text = _APOSTROPHE_RE.sub("'", text.lower())
    text = _NAME_PUNCTUATION_RE.sub(" ", text)
    tokens = []
    for token in text.split():
        token = token.lstrip("'/")
        if token and token.strip("'/"):
            tokens.append(token)
    return tokens


def _strip_phrases(tokens: list[str], phrases: Sequence[tuple[str, ...]]) -> list[str]:
    kept: list[str] = []
    i = 0
    while i < len(tokens):
        for phrase in phrases:
            if tuple(tokens[i:i + len(phrase)]) == phrase:
                i += len(phrase)
                break
        else:
            kept.append(tokens[i])
            i += 1
    return kept


def normalize(text: str, strip_phrases: Sequence[tuple[str, ...]] | None = None) -> str:
    """Canonicalize a name or role string.

    Lowercases, drops brackets and trailing punctuation, removes honorifics
    and connective particles, and collapses whitespace. Removal is repeated
    until nothing changes, so titles uncovered by an earlier removal are
    stripped too.

    Args:
        text: Raw name as extracted from a transcript or registry.
        strip_phrases: Token phrases to remove; defaults to the curated
            honorifics and particles.

    Returns:
        Normalized name, possibly empty.
    """
    if not text:
        return ""
    phrases = _DEFAULT_STRIP_PHRASES if strip_phrases is None else strip_phrases
    tokens = _name_tokens(text)
    while True:
        stripped = _strip_phrases(tokens, phrases)
        if stripped == tokens:
            return " ".join(tokens)
        tokens = stripped


def build_strip_phrases(honorifics: Iterable[str], particles: Iterable[str]) -> tuple[tuple[str, ...], ...]:
    """Build a custom phrase set for :func:`normalize`."""
    return _phrases([*honorifics, *particles])


def normalize_constituency(text: str) -> str:
    """Canonicalize a constituency name: lowercase alphanumerics and single spaces."""
    if not text:
        return ""
    lowered = _CONSTITUENCY_STRIP_RE.sub(" ", text.lower())
    return _WHITESPACE_RE.sub(" ", lowered).strip()


def normalize_phrase(text: str) -> str:
    """Normalize a vocabulary phrase without stripping any honorific."""
    return " ".join(_name_tokens(text))


def tokenize(normalized: str, min_length: int = MIN_TOKEN_LENGTH) -> list[str]:
    """Split a normalized name into scoring tokens of at least ``min_length`` chars."""
    return [t for t in normalized.split() if len(t) >= min_length]


def contains_phrase(text: str, phrase: str) -> bool:
    """Whether ``phrase`` occurs in ``text`` on whole-word boundaries."""
    if not text or not phrase:
        return False
    return f" {phrase} " in f" {text} "


def starts_with_phrase(text: str, phrase: str) -> bool:
    """Whether ``text`` begins with the whole words of ``phrase``."""
    if not text or not phrase:
        return False
    return f"{text} ".startswith(f"{phrase} ")


def clean_captured_text(text: str) -> str:
    """Tidy a regex capture group: collapse spaces, trim separators and brackets."""
    if not text:
        return ""
    cleaned = _WHITESPACE_RE.sub(" ", text.strip())
    cleaned = re.sub(r"^[:\-\s]+|[:\-\s]+$", "", cleaned)
    cleaned = re.sub(r"[\[\]()]+$", "", cleaned)
    cleaned = re.sub(r"^[\[\]()]+", "", cleaned)
    return cleaned.strip()
