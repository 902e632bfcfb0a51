# ABOUTME: The `artref lookup` command for resolving a single place and period to artworks.
# ABOUTME: Queries every configured provider and prints the combined results.

import asyncio

import click
from rich.console import Console
from rich.table import Table

from artref.artworks.http import ArtrefHttpClient
from artref.artworks.resolver import ResolutionResult
from artref.cli import factories
from artref.cli.options import limit_option
from artref.config import ArtrefConfig
from artref.extraction.types import Candidate, DateRange

console = Console()


async def _run_lookup(candidate: Candidate, config: ArtrefConfig) -> ResolutionResult:
    async with ArtrefHttpClient() as http_client:
        resolver = factories.create_resolver(config, http_client)
        return await resolver.resolve_detailed(candidate, config.per_provider_limit)


def _build_range(start: int | None, end: int | None) -> DateRange | None:
    if start is None and end is None:
        return None
    start = start if start is not None else end
    end = end if end is not None else start
    try:
        return DateRange(start, end)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--start/--end") from exc


@click.command("lookup")
@click.argument("location")
@click.option("--start", type=int, default=None, help="First year of the period.")
@click.option("--end", type=int, default=None, help="Last year of the period.")
@limit_option
def lookup(location: str, start: int | None, end: int | None, limit: int | None) -> None:
    """Find artworks for a place, optionally within a period."""
    config = ArtrefConfig.from_env().with_overrides(per_provider_limit=limit)
    candidate = Candidate(location=location, date_range=_build_range(start, end))

    result = asyncio.run(_run_lookup(candidate, config))

    for provider, reason in result.failures.items():
        console.print(f"[red]{provider} failed:[/red] {reason}")

    if not result.records:
        console.print(f"[yellow]No related art found for {candidate.describe()}.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Artist")
    table.add_column("Date")
    table.add_column("Source")

    for record in result.records:
        table.add_row(
            record.id,
            record.title,
            record.artist or "[dim]unknown[/dim]",
            record.date_label or "?",
            record.source,
        )

    console.print(table)
    console.print(f"\n[dim]{len(result.records)} artwork(s)[/dim]")
