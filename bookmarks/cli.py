"""
Bookmark Checker v1 - Command Line Interface

Check the links in a bookmark export from the terminal.

Usage:
    python -m bookmarks.cli stats --file ~/bookmarks.html
    python -m bookmarks.cli check --file ~/links.md --export invalid.csv
"""

import asyncio
import sys
from collections import Counter
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from config import configure_logging, get_config, load_env, reload_config
from . import __version__
from .checker import create_checker
from .exporter import export_filename, export_invalid_bookmarks
from .models import Bookmark, BookmarkFileType, BookmarkStatus
from .orchestrator import BatchOrchestrator
from .parser import UnsupportedFileTypeError, parse_bookmarks_path
from .session import BookmarkSession

console = Console()


def load_or_exit(file: Path) -> tuple[BookmarkFileType, list[Bookmark]]:
    """Parse a bookmark file, exiting with an error message on failure"""
    try:
        file_type, bookmarks = parse_bookmarks_path(file)
    except UnsupportedFileTypeError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if not bookmarks:
        console.print(f"[yellow]No bookmarks could be parsed from {file}.[/yellow]")
        if file_type == BookmarkFileType.MARKDOWN:
            console.print("Expected Markdown tables like:")
            console.print("  | Name | URL | Description |")
            console.print("  | ---- | --- | ----------- |")
            console.print("  | Example | https://example.com | optional |")
        sys.exit(1)

    return file_type, bookmarks


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Load settings from this .env file first"
)
def cli(env_file: Optional[str]):
    """Bookmark Checker - find dead links in bookmark exports"""
    if env_file and load_env(env_file):
        reload_config()
    configure_logging()


@cli.command()
@click.option(
    "--file", "-f",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="HTML or Markdown bookmark file"
)
def stats(file: Path):
    """
    Show what a bookmark file contains without checking anything.
    """
    file_type, bookmarks = load_or_exit(file)

    console.print(f"\n[bold blue]Bookmark File Statistics[/bold blue]")
    console.print(f"File: {file} ({file_type.value})")
    console.print(f"Total bookmarks: {len(bookmarks)}")
    console.print()

    categories = Counter(b.category or "(none)" for b in bookmarks)
    table = Table(title="Bookmarks by Category")
    table.add_column("Category", style="cyan")
    table.add_column("Count", justify="right", style="green")

    for category, count in sorted(categories.items()):
        table.add_row(category, str(count))

    console.print(table)


@cli.command()
@click.option(
    "--file", "-f",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="HTML or Markdown bookmark file"
)
@click.option(
    "--batch-size", "-b",
    type=int,
    default=None,
    help="Number of URLs checked concurrently (default: CHECK_BATCH_SIZE or 5)"
)
@click.option(
    "--timeout", "-t",
    type=float,
    default=None,
    help="Per-URL timeout in seconds (default: CHECK_TIMEOUT or 10)"
)
@click.option(
    "--service-url",
    default=None,
    help="Use a running check-url service instead of probing directly"
)
@click.option(
    "--export", "-o", "export_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write invalid bookmarks to this CSV file"
)
@click.option(
    "--show-valid",
    is_flag=True,
    help="Also list bookmarks that passed"
)
def check(
    file: Path,
    batch_size: Optional[int],
    timeout: Optional[float],
    service_url: Optional[str],
    export_path: Optional[Path],
    show_valid: bool,
):
    """
    Check every URL in a bookmark file.

    URLs are probed with HEAD requests in batches; broken links are listed
    at the end and can be exported as CSV.
    """
    settings = get_config().checker
    file_type, bookmarks = load_or_exit(file)

    console.print(f"\n[bold blue]Bookmark Check[/bold blue]")
    console.print(f"File: {file} ({file_type.value})")
    console.print(f"Bookmarks: {len(bookmarks)}")
    console.print()

    session = BookmarkSession(bookmarks)
    result = asyncio.run(_run_check(
        session,
        batch_size=batch_size or settings.batch_size,
        timeout=timeout or settings.timeout,
        user_agent=settings.user_agent,
        service_url=service_url or settings.service_url,
    ))

    _print_results(session.bookmarks, show_valid)

    summary = Table(title="Summary")
    summary.add_column("Metric", style="cyan")
    summary.add_column("Count", justify="right", style="green")
    summary.add_row("Total", str(result.total))
    summary.add_row("Valid", str(result.valid))
    summary.add_row("Invalid", str(result.invalid))
    console.print(summary)

    if export_path is not None:
        csv_text = export_invalid_bookmarks(session.bookmarks)
        if not csv_text:
            console.print("[yellow]No invalid bookmarks to export.[/yellow]")
        else:
            export_path.write_text(csv_text, encoding="utf-8")
            console.print(f"[green]Exported {result.invalid} invalid bookmarks to {export_path}[/green]")
    elif result.invalid:
        console.print(f"Tip: re-run with --export {export_filename()} to save the report")


async def _run_check(
    session: BookmarkSession,
    batch_size: int,
    timeout: float,
    user_agent: str,
    service_url: Optional[str],
):
    checker = create_checker(timeout=timeout, user_agent=user_agent, service_url=service_url)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Checking bookmarks...", total=len(session))

        def on_progress(event: str, index: int, batch: list[Bookmark]) -> None:
            if event == "checked":
                progress.advance(task, len(batch))

        orchestrator = BatchOrchestrator(checker, batch_size=batch_size, on_progress=on_progress)
        try:
            return await orchestrator.run_check(session)
        finally:
            await checker.close()


def _print_results(bookmarks: list[Bookmark], show_valid: bool) -> None:
    invalid = [b for b in bookmarks if b.status == BookmarkStatus.INVALID]

    if invalid:
        table = Table(title="Invalid Bookmarks")
        table.add_column("Name", style="cyan", max_width=40)
        table.add_column("URL", max_width=60)
        table.add_column("Category")
        table.add_column("Error", style="red")

        for bookmark in invalid:
            table.add_row(
                bookmark.name,
                bookmark.url,
                bookmark.category or "",
                bookmark.error_message or "",
            )
        console.print(table)
        console.print()
    else:
        console.print("[bold green]All bookmarks are reachable![/bold green]")
        console.print()

    if show_valid:
        table = Table(title="Valid Bookmarks")
        table.add_column("Name", style="cyan", max_width=40)
        table.add_column("URL", max_width=60)
        table.add_column("Status", justify="right", style="green")
        table.add_column("Time (ms)", justify="right")

        for bookmark in bookmarks:
            if bookmark.status == BookmarkStatus.VALID:
                table.add_row(
                    bookmark.name,
                    bookmark.url,
                    str(bookmark.status_code or ""),
                    str(bookmark.response_time_ms or 0),
                )
        console.print(table)
        console.print()


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == "__main__":
    main()
