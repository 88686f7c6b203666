"""Pytest configuration and fixtures."""

import logging
from datetime import date

import pytest
import structlog

from hansard_attribution.models import Legislator, SessionMetadata
from hansard_attribution.processing import LegislatorRegistry, SpeakerResolver


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration applied by CLI invocations."""
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


@pytest.fixture
def legislators() -> list[Legislator]:
    """Small snapshot of Dewan Rakyat members."""
    sworn = date(2022, 12, 19)
    return [
        Legislator(id="L1", canonical_name="Ahmad", constituency="Kuala Terengganu", sworn_in_date=sworn),
        Legislator(id="L2", canonical_name="Anwar bin Ibrahim", constituency="Tambun", sworn_in_date=sworn),
        Legislator(
            id="L3", canonical_name="Hannah Yeoh Tseow Suan", constituency="Segambut", sworn_in_date=sworn
        ),
        Legislator(id="L4", canonical_name="Fadillah bin Yusof", constituency="Petra Jaya", sworn_in_date=sworn),
        Legislator(id="L5", canonical_name="Lim Guan Eng", constituency="Bagan", sworn_in_date=sworn),
        Legislator(
            id="L6", canonical_name="Wong Chen", constituency="Subang", sworn_in_date=date(2023, 6, 1)
        ),
    ]


@pytest.fixture
def registry(legislators) -> LegislatorRegistry:
    return LegislatorRegistry(legislators)


@pytest.fixture
def resolver(registry) -> SpeakerResolver:
    return SpeakerResolver(registry)


@pytest.fixture
def session() -> SessionMetadata:
    return SessionMetadata(session_id="DR.04.03.2024", session_date=date(2024, 3, 4))


@pytest.fixture
def sample_transcript() -> str:
    """Sample Dewan Rakyat sitting mixing header forms, officials and an unknown speaker."""
    return "\n".join(
        [
            "DEWAN RAKYAT",
            "Isnin, 4 Mac 2024",
            "",
            "Tuan Yang di-Pertua: Sila duduk. Sesi dimulakan.",
            "Tuan Ahmad [Kuala Terengganu]: Terima kasih. Saya ingin bertanya tentang harga beras.",
            "Puan Hannah Yeoh [Segambut]: Soalan tambahan daripada saya.",
            "Dato' Seri Anwar bin Ibrahim [Tambun]: Harga beras akan dikawal.",
            "Ahmad (Kuala Terengganu): Terima kasih atas jawapan itu.",
            "Tuan Unknown [Nowhere]: Saya tidak disenaraikan.",
            "Timbalan Yang di-Pertua [Dato' Ramli]: Masa sudah tamat.",
            "Tuan Ahmad [Kuala Terengganu]: Satu perkara lagi.",
        ]
    )
