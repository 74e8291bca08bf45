"""Command line interface for schema-index."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from schemaindex.catalog.glob import glob_to_regex
from schemaindex.config import DEFAULT_BASE_URL, DEFAULT_CATALOG_URL, AppConfig
from schemaindex.errors import GlobError, SchemaIndexError
from schemaindex.index.indexer import Indexer, write_index
from schemaindex.utils.git import GitRepository


console = Console()
app = typer.Typer(help="schema-index - build a JSON index of schemas tracked in git")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


@app.command()
def build(
    schema_dir: Path = typer.Argument(..., metavar="DIR", help="Schema directory, relative to the git directory."),
    git: Path = typer.Option(Path("."), "--git", help="Git repository"),
    out: Path = typer.Option(AppConfig().out_path, "--out", "-o", help="Output JSON file"),
    url: str = typer.Option(DEFAULT_BASE_URL, "--url", help="The base URL of the schemas"),
    schema_store: bool = typer.Option(
        False, "--schema-store", help="Include toml-compatible schemas from schemastore.org"
    ),
    catalog_url: str = typer.Option(DEFAULT_CATALOG_URL, "--catalog-url", help="Schema catalog URL"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Build the schema index for a directory of committed schemas."""
    _setup_logging(verbose)
    config = AppConfig(
        schema_dir=schema_dir,
        git_dir=git,
        out_path=out,
        base_url=url,
        schema_store=schema_store,
        catalog_url=catalog_url,
    )
    now = datetime.now(timezone.utc)

    try:
        repository = GitRepository.discover(config.git_dir)
        indexer = Indexer(config, repository)
        index = indexer.build(now)
        resolved_out = config.resolve_out_path(Path.cwd())
        write_index(index, resolved_out)
    except SchemaIndexError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc

    stats = indexer.stats
    if stats.catalog_skipped:
        console.print(
            f"[yellow]Error fetching schema store: {escape(stats.catalog_error or '')}[/yellow]"
        )
    console.print(
        f"Wrote [bold]{escape(str(resolved_out))}[/bold]: local: {stats.local}, remote: {stats.remote}"
    )


@app.command()
def patterns(
    globs: List[str] = typer.Argument(..., help="Extension-stripped file-match globs"),
    extension: str = typer.Option("toml", "--extension", help="File extension the patterns match"),
) -> None:
    """Show the regular expressions generated for file-match globs."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Glob")
    table.add_column("Pattern")

    for glob in globs:
        try:
            pattern = Text(glob_to_regex(glob, extension))
        except GlobError as exc:
            pattern = Text(f"invalid: {exc.reason}", style="yellow")
        table.add_row(Text(glob), pattern)

    console.print(table)
