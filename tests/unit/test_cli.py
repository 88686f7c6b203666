"""Unit tests for the command-line interface."""

import json

import pytest
from typer.testing import CliRunner

from hansard_attribution.cli import app, load_legislators
from hansard_attribution.models import TranscriptAttribution

runner = CliRunner()


@pytest.fixture
def registry_file(tmp_path, legislators):
    path = tmp_path / "registry.json"
    path.write_text(
        json.dumps({"legislators": [legislator.model_dump(mode="json") for legislator in legislators]}),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def transcript_file(tmp_path, sample_transcript):
    path = tmp_path / "DR.04.03.2024.txt"
    path.write_text(sample_transcript, encoding="utf-8")
    return path


def _attribute(transcript_file, registry_file, output, session_date="2024-03-04"):
    return runner.invoke(
        app,
        [
            "attribute",
            str(transcript_file),
            "--registry",
            str(registry_file),
            "--session-date",
            session_date,
            "--output",
            str(output),
        ],
    )


class TestAttributeCommand:
    """Tests for the attribute command."""

    def test_writes_attribution(self, tmp_path, transcript_file, registry_file):
        output = tmp_path / "out.json"
        result = _attribute(transcript_file, registry_file, output)

        assert result.exit_code == 0, result.output
        assert "Unique Speakers" in result.output
        attribution = TranscriptAttribution.model_validate_json(output.read_text(encoding="utf-8"))
        assert attribution.session.session_id == "DR.04.03.2024"
        assert len(attribution.instances) == 5

    def test_invalid_date(self, tmp_path, transcript_file, registry_file):
        result = _attribute(transcript_file, registry_file, tmp_path / "out.json", session_date="04/03/2024")
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_duplicate_registry_ids(self, tmp_path, transcript_file, legislators):
        path = tmp_path / "dupes.json"
        rows = [legislator.model_dump(mode="json") for legislator in legislators]
        path.write_text(json.dumps(rows + rows[:1]), encoding="utf-8")

        result = _attribute(transcript_file, path, tmp_path / "out.json")
        assert result.exit_code == 1
        assert "Duplicate legislator id" in result.output


class TestParticipationCommand:
    """Tests for the participation command."""

    def test_aggregates_sessions(self, tmp_path, transcript_file, registry_file):
        first = tmp_path / "first.json"
        assert _attribute(transcript_file, registry_file, first).exit_code == 0
        participation_file = tmp_path / "participation.json"

        result = runner.invoke(
            app,
            ["participation", str(first), "--registry", str(registry_file), "--output", str(participation_file)],
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(participation_file.read_text(encoding="utf-8"))
        assert payload["L1"]["sessions_spoke"] == 1
        assert payload["L1"]["total_speeches"] == 2
        assert payload["L5"]["sessions_spoke"] == 0


class TestInfoCommand:
    """Tests for the info command."""

    def test_shows_settings(self):
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert "Hansard Speaker Attribution" in result.output
        assert "Scan Overlap" in result.output


class TestLoadLegislators:
    """Tests for registry snapshot loading."""

    def test_plain_list(self, tmp_path):
        path = tmp_path / "registry.json"
        path.write_text(
            json.dumps([{"id": "L1", "name": "Ahmad", "constituency": "Kuala Terengganu", "swornInDate": "2022-12-19"}]),
            encoding="utf-8",
        )
        assert [legislator.id for legislator in load_legislators(path)] == ["L1"]
