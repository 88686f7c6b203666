"""Unit tests for session and cross-session statistics."""

from datetime import date

import pytest

from hansard_attribution.models import (
    HeaderForm,
    Legislator,
    ResolvedSpeakingInstance,
    SessionMetadata,
    SessionSpeechStats,
)
from hansard_attribution.processing import (
    LegislatorRegistry,
    SpeechStatisticsAggregator,
    aggregate_participation,
    is_eligible,
)


def _instance(legislator_id: str, order: int, number: int, position: int) -> ResolvedSpeakingInstance:
    return ResolvedSpeakingInstance(
        legislator_id=legislator_id,
        legislator_name=f"Name {legislator_id}",
        constituency="X",
        session_speaking_order=order,
        instance_number_for_legislator=number,
        header_position=position,
        header_length=5,
        captured_header="Name:",
        header_form=HeaderForm.NAME_BRACKET_CONSTITUENCY,
    )


def _stats(session_id: str, session_date: date, counts: dict[str, int]) -> SessionSpeechStats:
    return SessionSpeechStats(
        session_id=session_id,
        session_date=session_date,
        unique_speaker_count=len(counts),
        total_speech_instances=sum(counts.values()),
        per_legislator_counts=counts,
    )


class TestBroadCounts:
    """Tests for the all-instances counting pass."""

    def test_counts_title_headers(self, registry, sample_transcript):
        counts = SpeechStatisticsAggregator(registry).broad_counts(sample_transcript)
        assert counts == {"L1": 2, "L3": 1, "L2": 1}

    def test_officials_not_counted(self, registry):
        text = "Tuan Yang di-Pertua: Sila duduk.\nTuan Yang di-Pertua: Sila duduk."
        assert SpeechStatisticsAggregator(registry).broad_counts(text) == {}

    def test_official_role_not_counted(self, registry):
        text = "Tuan Ahmad [Timbalan Yang di-Pertua]: Sila duduk.\nTuan Ahmad [Kuala Terengganu]: Ya."
        assert SpeechStatisticsAggregator(registry).broad_counts(text) == {"L1": 1}

    def test_broad_name_match(self, registry):
        text = "Dato' Seri Anwar Ibrahim Putra: Terima kasih.\n"
        assert SpeechStatisticsAggregator(registry).broad_counts(text) == {"L2": 1}


class TestSessionStats:
    """Tests for reconciled session statistics."""

    def test_repeat_speaker_scenario(self, session):
        registry = LegislatorRegistry(
            [
                Legislator(
                    id="L1",
                    canonical_name="Ahmad",
                    constituency="Kuala Terengganu",
                    sworn_in_date=date(2022, 12, 19),
                )
            ]
        )
        text = "Tuan Ahmad [Kuala Terengganu]: Saya bercakap. Tuan Ahmad [Kuala Terengganu]: Saya bercakap lagi."
        instances = [_instance("L1", 1, 1, 0), _instance("L1", 1, 2, text.index("Tuan Ahmad", 1))]
        stats = SpeechStatisticsAggregator(registry).session_stats(session, instances, text)

        assert stats.unique_speaker_count == 1
        assert stats.per_legislator_counts == {"L1": 2}
        assert stats.total_speech_instances == 2

    def test_minimum_one_speech(self, registry, session):
        instances = [_instance("L1", 1, 1, 0)]
        stats = SpeechStatisticsAggregator(registry).session_stats(session, instances, "", broad_counts={})
        assert stats.per_legislator_counts == {"L1": 1}

    def test_broad_counts_only_for_tracked_speakers(self, registry, session):
        instances = [_instance("L1", 1, 1, 0)]
        stats = SpeechStatisticsAggregator(registry).session_stats(
            session, instances, "", broad_counts={"L1": 3, "L5": 4}
        )
        assert stats.per_legislator_counts == {"L1": 3}
        assert stats.unique_speaker_count == 1

    def test_top_speakers_ordering(self, registry, session):
        instances = [
            _instance("L1", 1, 1, 0),
            _instance("L3", 2, 1, 10),
            _instance("L2", 3, 1, 20),
        ]
        broad = {"L1": 1, "L2": 3, "L3": 1}
        aggregator = SpeechStatisticsAggregator(registry)
        stats = aggregator.session_stats(session, instances, "", broad_counts=broad)
        assert [s.legislator_id for s in stats.top_speakers] == ["L2", "L1", "L3"]
        assert [s.legislator_id for s in stats.speaker_stats] == ["L1", "L3", "L2"]

        limited = SpeechStatisticsAggregator(registry, top_speakers_limit=2)
        stats = limited.session_stats(session, instances, "", broad_counts=broad)
        assert [s.legislator_id for s in stats.top_speakers] == ["L2", "L1"]

    def test_empty_session(self, registry, session):
        stats = SpeechStatisticsAggregator(registry).session_stats(session, [], "Tiada ucapan.")
        assert stats.unique_speaker_count == 0
        assert stats.total_speech_instances == 0
        assert stats.top_speakers == []


class TestLegislatorSpeechStats:
    """Tests for single-legislator statistics."""

    def test_spoke(self, registry):
        instances = [_instance("L1", 2, 1, 0), _instance("L1", 2, 2, 10)]
        stats = SpeechStatisticsAggregator(registry).legislator_speech_stats(
            "L1", instances, "", broad_counts={"L1": 4}
        )
        assert stats.spoke
        assert stats.total_speeches == 4
        assert stats.speaking_order == 2

    def test_did_not_speak(self, registry):
        stats = SpeechStatisticsAggregator(registry).legislator_speech_stats("L5", [], "")
        assert not stats.spoke
        assert stats.total_speeches == 0
        assert stats.speaking_order is None


class TestParticipation:
    """Tests for cross-session aggregation."""

    def test_eligibility_boundary(self, legislators):
        wong = next(legislator for legislator in legislators if legislator.id == "L6")
        assert not is_eligible(wong, date(2023, 5, 31))
        assert is_eligible(wong, date(2023, 6, 1))

    def test_sessions_before_sworn_in_are_ignored(self, legislators):
        sessions = [
            _stats("S1", date(2023, 1, 10), {"L6": 2, "L1": 1}),
            _stats("S2", date(2023, 7, 1), {"L6": 3}),
        ]
        result = aggregate_participation(legislators, sessions)

        assert result["L6"].sessions_spoke == 1
        assert result["L6"].total_speeches == 3
        assert result["L6"].eligible_sessions == 1
        assert result["L6"].participation_rate == pytest.approx(100.0)

        assert result["L1"].sessions_spoke == 1
        assert result["L1"].eligible_sessions == 2
        assert result["L1"].participation_rate == pytest.approx(50.0)
        assert result["L1"].average_speeches == pytest.approx(1.0)

    def test_average(self, legislators):
        sessions = [
            _stats("S1", date(2023, 7, 1), {"L2": 2}),
            _stats("S2", date(2023, 7, 2), {"L2": 5}),
            _stats("S3", date(2023, 7, 3), {}),
        ]
        result = aggregate_participation(legislators, sessions)
        assert result["L2"].average_speeches == pytest.approx(3.5)
        assert result["L2"].participation_rate == pytest.approx(200 / 3)

    def test_never_spoke(self, legislators):
        result = aggregate_participation(legislators, [_stats("S1", date(2023, 7, 1), {})])
        assert result["L4"].sessions_spoke == 0
        assert result["L4"].average_speeches == 0.0
        assert result["L4"].participation_rate == 0.0

    def test_unknown_ids_ignored(self, legislators):
        result = aggregate_participation(legislators, [_stats("S1", date(2023, 7, 1), {"X9": 4})])
        assert "X9" not in result
