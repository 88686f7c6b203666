"""Unit tests for name and constituency normalization."""

import pytest

from hansard_attribution.processing.normalizer import (
    build_strip_phrases,
    clean_captured_text,
    contains_phrase,
    normalize,
    normalize_constituency,
    normalize_phrase,
    starts_with_phrase,
    tokenize,
)


class TestNormalize:
    """Tests for normalize."""

    def test_strips_compound_honorifics_and_particles(self):
        assert normalize("Dato' Sri Anwar bin Ibrahim") == "anwar ibrahim"

    def test_strips_titles_and_punctuation(self):
        assert normalize("YB. Tuan Haji Ahmad:") == "ahmad"

    def test_curly_apostrophe_is_a_title_too(self):
        assert normalize("Dato’ Ahmad") == "ahmad"

    def test_indian_name_particles(self):
        assert normalize("Tuan Gobind Singh a/l Karpal Singh") == "gobind singh karpal singh"

    def test_brackets_removed(self):
        assert normalize("(Tuan Ahmad)") == "ahmad"

    def test_title_only_is_empty(self):
        assert normalize("Tuan") == ""
        assert normalize("") == ""

    def test_custom_phrases(self):
        phrases = build_strip_phrases(["encik"], [])
        assert normalize("Encik Ahmad bin Ali", phrases) == "ahmad bin ali"

    @pytest.mark.parametrize(
        "text",
        [
            "Dato' Sri Anwar bin Ibrahim",
            "Tuan Yang di-Pertua",
            "YB Dr. Ir. Hj. Ahmad bin Hj. Abdullah",
            "  Puan  Hannah   Yeoh [Segambut]: ",
            "Timbalan Menteri Kewangan I",
            "a/l a/p ' / '' //",
            "Tan Dr Sri Ahmad",
        ],
    )
    def test_idempotent(self, text):
        once = normalize(text)
        assert normalize(once) == once


class TestConstituency:
    """Tests for normalize_constituency."""

    def test_case_punctuation_and_spacing(self):
        assert normalize_constituency("  Kuala  Terengganu. ") == "kuala terengganu"

    def test_hyphen_becomes_space(self):
        assert normalize_constituency("Pasir-Mas") == "pasir mas"

    def test_idempotent(self):
        once = normalize_constituency("Johor Bahru!")
        assert normalize_constituency(once) == once


class TestPhraseHelpers:
    """Tests for word-boundary helpers and tokenization."""

    def test_contains_phrase_whole_words(self):
        assert contains_phrase("ahmad zahid hamidi", "zahid")
        assert not contains_phrase("ahmad zahidi", "zahid")

    def test_starts_with_phrase(self):
        assert starts_with_phrase("menteri kewangan", "menteri")
        assert not starts_with_phrase("menterinya", "menteri")
        assert not starts_with_phrase("bagan datuk", "datuk")

    def test_normalize_phrase_keeps_honorifics(self):
        assert normalize_phrase("Timbalan Yang di-Pertua") == "timbalan yang di pertua"

    def test_tokenize_drops_short_tokens(self):
        assert tokenize("ng wei aik") == ["wei", "aik"]

    def test_clean_captured_text(self):
        assert clean_captured_text("  Tuan   Ahmad :- ") == "Tuan Ahmad"
        assert clean_captured_text("[Segambut]") == "Segambut"
