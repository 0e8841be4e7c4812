"""Command line interface for DocScout."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from docscout.analysis.heuristics import (
    analyze_content,
    extract_keywords,
    extract_timeline,
    extract_topics,
    summarize,
)
from docscout.config import SORT_BY_RELEVANCE, AppConfig, SearchOptions
from docscout.ingestion.loader import iter_corpus_paths, load_corpus
from docscout.models import AdvancedSearchCriteria, DateRange, Document, SearchResult, SizeRange
from docscout.search.engine import SEMANTIC_MAX_RESULTS, SearchEngine
from docscout.utils.text import highlight, normalize, truncate_text
from docscout.web.app import app as web_app


console = Console()
app = typer.Typer(help="DocScout - relevance search across processed documents")

SNIPPET_WIDTH = 180


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load(inputs: List[Path], enrich: bool = False) -> Optional[List[Document]]:
    if not list(iter_corpus_paths(inputs)):
        console.print("[yellow]No corpus files found.[/yellow]")
        return None
    return load_corpus(inputs, enrich=enrich)


def _print_results(query: str, results: List[SearchResult]) -> None:
    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    terms = normalize(query)
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Score", no_wrap=True)
    table.add_column("Document", no_wrap=True)
    table.add_column("Type", no_wrap=True)
    table.add_column("Context")

    for result in results:
        snippet = escape(truncate_text(result.context.replace("\n", " "), SNIPPET_WIDTH))
        table.add_row(
            f"{result.score:.2f}",
            escape(result.document_name),
            result.match_type.value,
            highlight(snippet, terms, start="[bold yellow]", end="[/bold yellow]"),
        )

    console.print(table)


def _parse_day(value: Optional[str], *, end_of_day: bool = False) -> Optional[datetime]:
    if value is None:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid date: {value}") from exc
    if end_of_day and len(value) == 10:
        parsed = parsed.replace(hour=23, minute=59, second=59, microsecond=999999)
    return parsed


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    inputs: List[Path] = typer.Argument(..., help="Corpus files or directories", resolve_path=True),
    include_text: bool = typer.Option(True, "--text/--no-text", help="Search full text"),
    include_ocr: bool = typer.Option(True, "--ocr/--no-ocr", help="Search OCR text of images"),
    include_metadata: bool = typer.Option(True, "--metadata/--no-metadata", help="Search title and author"),
    sort_by: str = typer.Option(SORT_BY_RELEVANCE, help="relevance or name"),
    max_results: Optional[int] = typer.Option(
        None,
        help=f"Maximum number of results (default {AppConfig().search.max_results}, {SEMANTIC_MAX_RESULTS} with --semantic)",
    ),
    threshold: float = typer.Option(AppConfig().search.threshold, help="Minimum relevance score"),
    semantic: bool = typer.Option(False, "--semantic", help="Rank by term overlap instead"),
    enrich: bool = typer.Option(False, "--enrich", help="Derive missing summaries, keywords and topics"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search the corpus for QUERY."""
    _setup_logging(verbose)
    if max_results is None:
        max_results = SEMANTIC_MAX_RESULTS if semantic else AppConfig().search.max_results
    try:
        options = SearchOptions(
            include_text=include_text,
            include_ocr=include_ocr,
            include_metadata=include_metadata,
            sort_by=sort_by,
            max_results=max_results,
            threshold=threshold,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    documents = _load(inputs, enrich)
    if documents is None:
        return

    engine = SearchEngine()
    if semantic:
        results = engine.semantic_search(query, documents, max_results=max_results)
    else:
        results = engine.search(query, documents, options)
    _print_results(query, results)


@app.command()
def advanced(
    inputs: List[Path] = typer.Argument(..., help="Corpus files or directories", resolve_path=True),
    query: Optional[str] = typer.Option(None, "--query", "-q", help="Optional query text"),
    file_types: List[str] = typer.Option([], "--type", help="Keep only these file types"),
    date_from: Optional[str] = typer.Option(None, "--from", help="Uploaded on or after (ISO date)"),
    date_to: Optional[str] = typer.Option(None, "--to", help="Uploaded on or before (ISO date)"),
    min_size: Optional[int] = typer.Option(None, help="Minimum size in bytes"),
    max_size: Optional[int] = typer.Option(None, help="Maximum size in bytes"),
    authors: List[str] = typer.Option([], "--author", help="Keep only these authors"),
    languages: List[str] = typer.Option([], "--language", help="Keep only these languages"),
    topics: List[str] = typer.Option([], "--topic", help="Keep documents with any of these topics"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Filter the corpus and optionally search what remains."""
    _setup_logging(verbose)
    date_range = None
    if date_from is not None or date_to is not None:
        date_range = DateRange(
            start=_parse_day(date_from) or datetime.min,
            end=_parse_day(date_to, end_of_day=True) or datetime.max,
        )
    size_range = None
    if min_size is not None or max_size is not None:
        size_range = SizeRange(
            min=min_size if min_size is not None else 0,
            max=max_size if max_size is not None else 2**63 - 1,
        )

    documents = _load(inputs)
    if documents is None:
        return

    criteria = AdvancedSearchCriteria(
        query=query,
        file_types=file_types,
        date_range=date_range,
        size_range=size_range,
        authors=authors,
        languages=languages,
        topics=topics,
    )
    try:
        results = SearchEngine().advanced_search(criteria, documents)
    except TypeError as exc:
        # naive and aware datetimes cannot be compared
        raise typer.BadParameter(f"Cannot compare --from/--to with upload dates: {exc}") from exc
    _print_results(query or "", results)


def _print_counts(title: str, counts: Dict[str, int]) -> None:
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Value", no_wrap=True)
    table.add_column("Count", justify="right")
    for label, count in sorted(counts.items(), key=lambda item: (-item[1], item[0])):
        table.add_row(escape(label), str(count))
    console.print(table)


@app.command()
def facets(
    inputs: List[Path] = typer.Argument(..., help="Corpus files or directories", resolve_path=True),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show file type, language, topic and author counts."""
    _setup_logging(verbose)
    documents = _load(inputs)
    if documents is None:
        return

    result = SearchEngine().get_facets(documents)
    _print_counts("File types", result.file_types)
    _print_counts("Languages", result.languages)
    _print_counts("Topics", result.topics)
    _print_counts("Authors", result.authors)


@app.command()
def analyze(
    inputs: List[Path] = typer.Argument(..., help="Corpus files or directories", resolve_path=True),
    max_keywords: int = typer.Option(10, help="Keywords to show per document"),
    timeline: bool = typer.Option(False, "--timeline", help="Also list dated events found in each text"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Print derived keywords, topics, summary and content statistics for every document."""
    _setup_logging(verbose)
    documents = _load(inputs)
    if documents is None:
        return

    table = Table(title="Content", show_header=True, header_style="bold magenta")
    table.add_column("Document", no_wrap=True)
    table.add_column("Keywords")
    table.add_column("Topics")
    table.add_column("Summary")
    stats = Table(title="Statistics", show_header=True, header_style="bold magenta")
    stats.add_column("Document", no_wrap=True)
    stats.add_column("Words", justify="right")
    stats.add_column("Readability", justify="right")
    stats.add_column("Sentiment", no_wrap=True)
    stats.add_column("Complexity", no_wrap=True)
    for document in documents:
        table.add_row(
            escape(document.name),
            escape(", ".join(extract_keywords(document.text, max_keywords))),
            escape(", ".join(extract_topics(document.text))),
            escape(summarize(document.text)),
        )
        analysis = analyze_content(document.text)
        stats.add_row(
            escape(document.name),
            str(analysis.word_count),
            f"{analysis.readability:.1f}",
            f"{analysis.sentiment.label} ({analysis.sentiment.score:+.2f})",
            analysis.complexity,
        )
    console.print(table)
    console.print(stats)

    if timeline:
        for document in documents:
            _print_timeline(document)


def _print_timeline(document: Document) -> None:
    events = extract_timeline(document.text)
    if not events:
        console.print(f"[yellow]No dated events in {escape(document.name)}.[/yellow]")
        return

    table = Table(title=f"Timeline: {escape(document.name)}", show_header=True, header_style="bold magenta")
    table.add_column("Date", no_wrap=True)
    table.add_column("Event", no_wrap=True)
    table.add_column("Description")
    for event in events:
        table.add_row(event.date.isoformat(), event.title, escape(event.description))
    console.print(table)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    corpus: Path = typer.Option(None, "--corpus", help="Default corpus path"),
) -> None:
    """Start the HTTP API."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install it with \"python -m pip install uvicorn\""
        ) from exc

    config = AppConfig(corpus_path=corpus if corpus is not None else AppConfig().corpus_path)
    resolved = config.resolve_corpus_path(Path.cwd())
    if not resolved.exists():
        console.print("[yellow]Warning: corpus not found, searches might fail.[/yellow]")
    web_app.state.corpus_path = resolved

    console.print(f"Starting web interface on http://{host}:{port} (corpus: {resolved})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
