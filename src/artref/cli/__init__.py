# ABOUTME: CLI package for artref, built on Click.
# ABOUTME: Defines the root command group, the --verbose logging switch, and registers subcommands.

import logging

import click
from rich.logging import RichHandler

from artref.cli.commands import candidates_cmd, lookup_cmd, scan_cmd


@click.group()
@click.version_option(package_name="artref")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show diagnostic logging.")
def cli(verbose: bool) -> None:
    """artref - find artworks for the places and periods an article mentions."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
            force=True,
        )
        # httpx logs every request at INFO; keep it out of the way.
        logging.getLogger("httpx").setLevel(logging.WARNING)


cli.add_command(candidates_cmd.candidates)
cli.add_command(scan_cmd.scan)
cli.add_command(lookup_cmd.lookup)
