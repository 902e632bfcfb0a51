# ABOUTME: Shared Click options for artref CLI commands.
# ABOUTME: Provides reusable decorators for result limits and scan windows.

import click

from artref.artworks.types import DEFAULT_LIMIT
from artref.extraction.extractor import DEFAULT_SCAN_LIMIT

limit_option = click.option(
    "-n",
    "--limit",
    type=click.IntRange(min=1),
    default=None,
    help=f"Maximum artworks per provider (default: {DEFAULT_LIMIT}).",
)

scan_limit_option = click.option(
    "--scan-limit",
    type=click.IntRange(min=1),
    default=None,
    help=f"Maximum characters of text to analyse (default: {DEFAULT_SCAN_LIMIT}).",
)
