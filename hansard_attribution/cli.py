"""Command-line interface for the Hansard speaker attribution engine."""

import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

import structlog
import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from hansard_attribution.config import get_settings
from hansard_attribution.models import Legislator, SessionMetadata, TranscriptAttribution
from hansard_attribution.pipeline import attribute_transcript
from hansard_attribution.processing import LegislatorRegistry, RegistryError, aggregate_participation

app = typer.Typer(
    name="hansard-attribution",
    help="Hansard speaker attribution - who spoke, and how often, in a parliamentary sitting",
    add_completion=False,
)
console = Console()


def configure_logging(verbose: bool = False) -> None:
    """Route structlog through stdlib logging at the configured level."""
    settings = get_settings()
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, stream=sys.stderr, format="%(message)s", force=True)

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def load_legislators(path: Path) -> list[Legislator]:
    """Load a registry snapshot: a JSON list, or an object with a ``legislators`` list."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("legislators", [])
    return [Legislator.model_validate(item) for item in data]


@app.command()
def attribute(
    transcript_path: Path = typer.Argument(
        ...,
        help="Path to the plain-text session transcript",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    registry_path: Path = typer.Option(
        ...,
        "--registry",
        "-r",
        help="JSON legislator snapshot",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
    session_id: Optional[str] = typer.Option(
        None,
        "--session-id",
        help="Session identifier (default: transcript file name)",
    ),
    session_date: str = typer.Option(
        ...,
        "--session-date",
        help="Session date, YYYY-MM-DD",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output JSON path (default: <transcript>_attribution.json)",
    ),
    pretty: bool = typer.Option(
        True,
        "--pretty/--compact",
        help="Pretty-print JSON output",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
) -> None:
    """Attribute the speeches of one transcript to registry legislators."""
    configure_logging(verbose)

    if output is None:
        output = transcript_path.with_name(f"{transcript_path.stem}_attribution.json")

    try:
        session = SessionMetadata(
            session_id=session_id or transcript_path.stem,
            session_date=date.fromisoformat(session_date),
        )
        transcript = transcript_path.read_text(encoding="utf-8")
        result = attribute_transcript(transcript, load_legislators(registry_path), session)

        with open(output, "w", encoding="utf-8") as f:
            f.write(result.model_dump_json(indent=2 if pretty else None))

    except Exception as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        if verbose:
            console.print_exception()
        sys.exit(1)

    _display_summary(result)
    console.print(f"\n[green]Attribution saved to:[/green] {output}")


@app.command()
def participation(
    attribution_paths: List[Path] = typer.Argument(
        ...,
        help="Attribution JSON files produced by 'attribute'",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
    registry_path: Path = typer.Option(
        ...,
        "--registry",
        "-r",
        help="JSON legislator snapshot",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write participation JSON to this path",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Aggregate participation across several attributed sessions."""
    configure_logging(verbose)

    try:
        registry = LegislatorRegistry(load_legislators(registry_path))
        sessions = []
        for path in attribution_paths:
            result = TranscriptAttribution.model_validate_json(path.read_text(encoding="utf-8"))
            sessions.append(result.stats)
    except (RegistryError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    totals = aggregate_participation(registry, sessions)

    table = Table(title=f"Participation across {len(sessions)} session(s)")
    table.add_column("Legislator")
    table.add_column("Spoke", justify="right")
    table.add_column("Eligible", justify="right")
    table.add_column("Speeches", justify="right")
    table.add_column("Average", justify="right")
    table.add_column("Rate", justify="right")

    ranked = sorted(totals.items(), key=lambda item: (-item[1].total_speeches, item[0]))
    for legislator_id, stats in ranked:
        if stats.sessions_spoke == 0:
            continue
        table.add_row(
            registry.get(legislator_id).canonical_name,
            str(stats.sessions_spoke),
            str(stats.eligible_sessions),
            str(stats.total_speeches),
            f"{stats.average_speeches:.1f}",
            f"{stats.participation_rate:.1f}%",
        )
    console.print(table)

    if output is not None:
        payload = {legislator_id: stats.model_dump() for legislator_id, stats in totals.items()}
        with open(output, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
        console.print(f"\n[green]Participation saved to:[/green] {output}")


@app.command()
def info() -> None:
    """Display version and effective configuration."""
    from hansard_attribution import __version__

    settings = get_settings()

    console.print(
        Panel.fit(
            "[bold blue]Hansard Speaker Attribution[/bold blue]",
            border_style="blue",
        )
    )

    table = Table(show_header=False, box=None)
    table.add_column("Setting", style="dim")
    table.add_column("Value")

    table.add_row("Version", __version__)
    table.add_row("Scan Chunk", f"{settings.scan_chunk_chars} chars")
    table.add_row("Scan Overlap", f"{settings.scan_overlap_chars} chars")
    table.add_row("Suggestion Threshold", f"{settings.suggestion_min_score} / {settings.suggestion_min_shared_tokens} token(s)")
    table.add_row("Max Suggestions", str(settings.max_suggestions))
    table.add_row("Broad Match Threshold", f"{settings.broad_match_min_score} / {settings.broad_match_min_shared_tokens} token(s)")
    table.add_row("Top Speakers", str(settings.top_speakers_limit))
    table.add_row("Log Level", settings.log_level)

    console.print(table)


def _display_summary(result: TranscriptAttribution) -> None:
    """Display a summary of one attributed session."""
    stats = result.stats
    console.print(f"\n[bold]Session {stats.session_id}[/bold] ({stats.session_date.isoformat()})")
    console.print("-" * 40)

    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="dim")
    table.add_column("Count", justify="right")
    table.add_row("Speaking Instances", str(len(result.instances)))
    table.add_row("Unique Speakers", str(stats.unique_speaker_count))
    table.add_row("Total Speeches", str(stats.total_speech_instances))
    table.add_row("Unmatched Headers", str(len(result.unmatched)))
    console.print(table)

    if stats.top_speakers:
        console.print("\n[bold]Top Speakers[/bold]")
        for i, speaker in enumerate(stats.top_speakers, 1):
            console.print(f"  {i}. {speaker.legislator_name} ({speaker.total_speeches} speeches)")

    if result.unmatched:
        console.print(f"\n[yellow]Unmatched:[/yellow] {len(result.unmatched)} header(s) need review")


if __name__ == "__main__":
    app()
