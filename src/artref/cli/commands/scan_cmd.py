# ABOUTME: The `artref scan` command for annotating a document with place/period markers.
# ABOUTME: Extracts candidates, anchors them, and resolves artworks for every dated marker.

import asyncio
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from artref.annotation.document import Document
from artref.annotation.session import AnnotationSession, ScanReport
from artref.artworks.http import ArtrefHttpClient
from artref.cli import factories
from artref.cli.commands._documents import read_document
from artref.cli.options import limit_option, scan_limit_option
from artref.config import ArtrefConfig
from artref.extraction.extractor import CandidateExtractor
from artref.extraction.recognizers import RecognitionUnavailable

_STYLE_COLORS = {
    "location": "red",
    "pending": "blue",
    "no-art": "blue",
    "art": "yellow",
}


async def _run_scan(
    document: Document, extractor: CandidateExtractor, config: ArtrefConfig, fetch: bool
) -> ScanReport:
    async with ArtrefHttpClient() as http_client:
        resolver = factories.create_resolver(config, http_client)
        session = AnnotationSession(
            extractor,
            resolver,
            per_provider_limit=config.per_provider_limit,
            scan_limit=config.scan_limit,
            fetch=fetch,
        )
        return await session.run(document)


@click.command("scan")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--html/--text",
    "as_html",
    default=None,
    help="Parse the file as HTML or plain text (default: by file extension).",
)
@scan_limit_option
@limit_option
@click.option(
    "--fetch/--no-fetch",
    default=True,
    help="Look up artworks for dated markers (default: --fetch).",
)
def scan(
    path: Path,
    as_html: bool | None,
    scan_limit: int | None,
    limit: int | None,
    fetch: bool,
) -> None:
    """Annotate a document and show the resulting markers."""
    console = Console()
    config = ArtrefConfig.from_env().with_overrides(
        scan_limit=scan_limit, per_provider_limit=limit
    )
    try:
        extractor = factories.create_extractor(config)
    except RecognitionUnavailable as exc:
        raise click.ClickException(str(exc)) from exc

    document = read_document(path, as_html)
    if not document.blocks:
        console.print("[yellow]Document has no text blocks.[/yellow]")
        return

    report = asyncio.run(_run_scan(document, extractor, config, fetch))

    if not report.markers:
        console.print("[yellow]No markers placed.[/yellow]")
    else:
        table = Table()
        table.add_column("Marker", style="dim")
        table.add_column("Text", style="bold")
        table.add_column("Period")
        table.add_column("State")
        table.add_column("Top artwork")

        for marker in report.markers:
            color = _STYLE_COLORS.get(marker.style, "white")
            candidate = marker.candidate
            top = marker.artworks[0] if marker.artworks else None
            table.add_row(
                marker.marker_id,
                marker.anchor.text,
                candidate.date_range.label() if candidate.date_range else "[dim]-[/dim]",
                f"[{color}]{marker.style}[/{color}]",
                f"{top.title} ({top.source})" if top else "[dim]-[/dim]",
            )
        console.print(table)

    counts = report.state_counts()
    summary = ", ".join(f"{count} {state.value}" for state, count in counts.items())
    console.print(
        f"\n[dim]{len(report.candidates)} candidate(s), {len(report.markers)} marker(s)"
        f"{' (' + summary + ')' if summary else ''}[/dim]"
    )
    if report.dropped:
        dropped = ", ".join(c.describe() for c in report.dropped)
        console.print(f"[dim]No anchor for: {dropped}[/dim]")
