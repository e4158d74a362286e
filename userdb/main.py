#!/usr/bin/env python3
"""
User database merge tool - entry point.

Merges several tab-delimited user database snapshots into one deduplicated,
key-sorted file. The main file supplies the header block and tick tag.

Usage:
    python -m userdb.main --main base.txt --input a.txt --input b.txt --output merged.txt
    userdb-merge -m base.txt -i a.txt -o merged.txt --stats
"""

from pathlib import Path

import click
from loguru import logger
from rich.console import Console
from rich.table import Table

from userdb import __version__
from userdb.ingest import MergeResult, merge_files
from userdb.utils.logging import setup_logging

# Diagnostics and tables go to stderr; stdout only carries the result line
console = Console(stderr=True)


def print_stats(result: MergeResult) -> None:
    """Print per-file merge statistics as a table."""
    table = Table(title="Merge Summary")
    table.add_column("File")
    table.add_column("Lines", justify="right")
    table.add_column("Skipped", justify="right")
    table.add_column("Invalid", justify="right")
    table.add_column("Inserted", justify="right")
    table.add_column("Updated", justify="right")
    table.add_column("Kept", justify="right")

    for stats in result.files:
        invalid = f"[red]{stats.rejected}[/red]" if stats.rejected else "0"
        table.add_row(
            stats.path,
            str(stats.lines),
            str(stats.skipped),
            invalid,
            str(stats.inserted),
            str(stats.updated),
            str(stats.kept),
        )

    console.print(table)

    duration = f"{result.duration_seconds:.2f}s" if result.duration_seconds is not None else "-"
    console.print(f"Records written: {result.records_written:,} [dim]({duration})[/dim]")


@click.command()
@click.version_option(__version__, prog_name="userdb-merge")
@click.option("--main", "-m", "main_file", required=True, type=click.Path(path_type=Path),
              help="Main file (supplies the header, merged first)")
@click.option("--input", "-i", "input_files", multiple=True, type=click.Path(path_type=Path),
              help="Input file, repeatable; merged in the order given")
@click.option("--output", "-o", "output_file", required=True, type=click.Path(path_type=Path),
              help="Output file (created or truncated)")
@click.option("--stats", "show_stats", is_flag=True, help="Print per-file merge statistics")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def cli(main_file: Path, input_files: tuple[Path, ...], output_file: Path, show_stats: bool, debug: bool):
    """Merge user database files, keeping the highest confidence per key."""
    setup_logging(level="DEBUG" if debug else None)

    try:
        result = merge_files(main_file, list(input_files), output_file)
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Merge aborted: {e!r}")
        raise click.ClickException(str(e)) from e

    if show_stats:
        print_stats(result)

    click.echo(f"Successfully merged files to {output_file}")


if __name__ == "__main__":
    cli()
