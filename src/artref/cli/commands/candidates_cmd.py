# ABOUTME: The `artref candidates` command for listing place/period candidates in a document.
# ABOUTME: Runs extraction only; no providers are contacted.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from artref.cli import factories
from artref.cli.commands._documents import read_document
from artref.cli.options import scan_limit_option
from artref.config import ArtrefConfig
from artref.extraction.recognizers import RecognitionUnavailable

console = Console()


@click.command("candidates")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--html/--text",
    "as_html",
    default=None,
    help="Parse the file as HTML or plain text (default: by file extension).",
)
@scan_limit_option
def candidates(path: Path, as_html: bool | None, scan_limit: int | None) -> None:
    """List the place and period candidates found in a document."""
    config = ArtrefConfig.from_env().with_overrides(scan_limit=scan_limit)
    try:
        extractor = factories.create_extractor(config)
    except RecognitionUnavailable as exc:
        raise click.ClickException(str(exc)) from exc

    document = read_document(path, as_html)
    found = extractor.extract(document.text)

    if not found:
        console.print("[yellow]No candidates found.[/yellow]")
        return

    table = Table()
    table.add_column("#", style="dim", width=4)
    table.add_column("Location", style="bold")
    table.add_column("Period")
    table.add_column("Key", style="dim")

    for index, candidate in enumerate(found, start=1):
        table.add_row(
            str(index),
            candidate.location,
            candidate.date_range.label() if candidate.date_range else "[dim]undated[/dim]",
            candidate.key,
        )

    console.print(table)
    console.print(f"\n[dim]{len(found)} candidate(s)[/dim]")
