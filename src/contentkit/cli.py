"""Command line interface for contentkit."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from contentkit.config import AppConfig
from contentkit.index.builder import SearchIndexBuilder
from contentkit.index.storage import write_search_index
from contentkit.ingestion.frontmatter import load_document, parse_frontmatter
from contentkit.models import ContentDocument, ValidationResult
from contentkit.utils.files import iter_content_paths, require_directory
from contentkit.utils.text import estimate_reading_time
from contentkit.validation.links import LinkChecker, check_links
from contentkit.validation.schema import validate_documents


console = Console(soft_wrap=True)
app = typer.Typer(help="contentkit - frontmatter validation, link checking and search indexing")

ROOT_OPTION = typer.Option(None, "--root", help="Project root; relative paths resolve against it")
CONTENT_OPTION = typer.Option(None, "--content", help="Content directory")
PAGES_OPTION = typer.Option(None, "--pages", help="Site pages directory")
CATEGORY_OPTION = typer.Option(None, "--category", help="Allowed category (repeatable)")
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Verbose logging")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _build_config(
    root: Optional[Path] = None,
    content: Optional[Path] = None,
    pages: Optional[Path] = None,
    output: Optional[Path] = None,
    categories: Optional[List[str]] = None,
    words_per_minute: Optional[int] = None,
) -> AppConfig:
    defaults = AppConfig()
    config = AppConfig(
        content_dir=content if content is not None else defaults.content_dir,
        pages_dir=pages if pages is not None else defaults.pages_dir,
        output_path=output if output is not None else defaults.output_path,
        categories=tuple(categories) if categories else defaults.categories,
        words_per_minute=words_per_minute if words_per_minute is not None else defaults.words_per_minute,
    )
    return config.resolved(root if root is not None else Path.cwd())


def _content_paths(config: AppConfig) -> List[Path]:
    try:
        require_directory(config.content_dir)
    except FileNotFoundError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return list(iter_content_paths(config.content_dir, config.extensions))


def _load_documents(config: AppConfig) -> List[ContentDocument]:
    return [
        load_document(path, config.content_dir, config.extensions)
        for path in _content_paths(config)
    ]


def _print_violations(result: ValidationResult, base_dir: Path) -> None:
    for violation in result.violations:
        style, label = ("red", "ERROR") if violation.is_error else ("yellow", "WARNING")
        console.print(
            f"[{style}]{label}[/{style}] {escape(violation.location(base_dir))}: "
            f"{escape(violation.message)}"
        )


@app.command()
def validate(
    root: Optional[Path] = ROOT_OPTION,
    content: Optional[Path] = CONTENT_OPTION,
    category: Optional[List[str]] = CATEGORY_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Validate the frontmatter of every content document."""
    _setup_logging(verbose)
    config = _build_config(root, content, categories=category)
    documents = _load_documents(config)

    console.print(f"Validating frontmatter in [bold]{escape(str(config.content_dir))}[/bold]...")
    result = validate_documents(documents, config)
    _print_violations(result, config.content_dir)

    errors, warnings = len(result.errors), len(result.warnings)
    if result.has_errors:
        console.print(
            f"[red]Frontmatter validation failed: {errors} errors, {warnings} warnings.[/red]"
        )
        raise typer.Exit(code=1)
    console.print(f"[green]All frontmatter is valid![/green] ({warnings} warnings)")


@app.command()
def links(
    root: Optional[Path] = ROOT_OPTION,
    content: Optional[Path] = CONTENT_OPTION,
    pages: Optional[Path] = PAGES_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Check internal and external links in every content document."""
    _setup_logging(verbose)
    config = _build_config(root, content, pages)
    documents = _load_documents(config)

    console.print(f"Validating links in [bold]{escape(str(config.content_dir))}[/bold]...")
    checker = LinkChecker.from_config(config)
    result = check_links(documents, checker)
    _print_violations(result, config.content_dir)

    if result.has_errors:
        console.print(f"[red]Link validation failed: {len(result.errors)} broken links.[/red]")
        raise typer.Exit(code=1)
    console.print("[green]All links are valid![/green]")


@app.command()
def index(
    root: Optional[Path] = ROOT_OPTION,
    content: Optional[Path] = CONTENT_OPTION,
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Search index output path"),
    wpm: Optional[int] = typer.Option(None, "--wpm", min=1, help="Reading speed in words per minute"),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Generate the JSON search index."""
    _setup_logging(verbose)
    config = _build_config(root, content, output=output, words_per_minute=wpm)
    paths = _content_paths(config)

    console.print("Generating search index...")
    result = SearchIndexBuilder(config).build(paths)
    _print_violations(result.diagnostics, config.content_dir)

    written = write_search_index(result.entries, config.output_path)
    console.print(
        f"Generated search index with {len(result.entries)} posts at "
        f"[bold]{escape(str(written))}[/bold] (skipped: {result.skipped})"
    )


@app.command("reading-time")
def reading_time(
    root: Optional[Path] = ROOT_OPTION,
    content: Optional[Path] = CONTENT_OPTION,
    wpm: Optional[int] = typer.Option(None, "--wpm", min=1, help="Reading speed in words per minute"),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Show the estimated reading time of every content document."""
    _setup_logging(verbose)
    config = _build_config(root, content, words_per_minute=wpm)
    documents = _load_documents(config)
    if not documents:
        console.print("[yellow]No content documents found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Document")
    table.add_column("Words", justify="right")
    table.add_column("Reading time")

    for document in documents:
        frontmatter = parse_frontmatter(document.text)
        body = frontmatter.body if frontmatter is not None else document.text
        estimate = estimate_reading_time(body, config.words_per_minute)
        table.add_row(escape(document.slug), str(estimate.words), estimate.display)

    console.print(table)
