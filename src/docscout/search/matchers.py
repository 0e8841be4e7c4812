"""Per-field matchers emitting candidate hits for a single document."""

from __future__ import annotations

import re
from typing import Iterable, List, Sequence

from docscout.models import Document, MatchType, SearchResult, Table
from docscout.search.scoring import (
    AUTHOR_SCORE,
    KEYWORD_SCORE,
    TABLE_CELL_SCORE,
    TABLE_HEADER_SCORE,
    TITLE_SCORE,
    relevance_score,
)
from docscout.utils.text import extract_context, normalize


def deduplicate(results: Iterable[SearchResult]) -> List[SearchResult]:
    """Drop hits repeating a (document id, content) pair, keeping the first."""
    seen: set[tuple[str, str]] = set()
    unique: List[SearchResult] = []
    for result in results:
        key = (result.document_id, result.content)
        if key in seen:
            continue
        seen.add(key)
        unique.append(result)
    return unique


def match_text(
    query: str,
    text: str,
    document: Document,
    match_type: MatchType = MatchType.TEXT,
) -> List[SearchResult]:
    """Find every occurrence of every query term inside ``text``."""
    results: List[SearchResult] = []

    for term in normalize(query):
        # offsets must index ``text`` itself; lower() can change its length
        for match in re.finditer(re.escape(term), text, re.IGNORECASE):
            context = extract_context(text, match.start(), len(match.group()))
            results.append(
                SearchResult(
                    document_id=document.id,
                    document_name=document.name,
                    content=context,
                    score=relevance_score(term, text, context),
                    match_type=match_type,
                    context=context,
                )
            )

    return deduplicate(results)


def match_metadata(query: str, document: Document) -> List[SearchResult]:
    """Case-insensitive substring match of the raw query on title and author."""
    results: List[SearchResult] = []
    query_lower = query.lower()
    metadata = document.metadata

    if metadata.title and query_lower in metadata.title.lower():
        results.append(
            SearchResult(
                document_id=document.id,
                document_name=document.name,
                content=metadata.title,
                score=TITLE_SCORE,
                match_type=MatchType.METADATA,
                context=f"Title: {metadata.title}",
            )
        )

    if metadata.author and query_lower in metadata.author.lower():
        results.append(
            SearchResult(
                document_id=document.id,
                document_name=document.name,
                content=metadata.author,
                score=AUTHOR_SCORE,
                match_type=MatchType.METADATA,
                context=f"Author: {metadata.author}",
            )
        )

    return results


def match_table(query: str, table: Table, document: Document) -> List[SearchResult]:
    """Match the raw query against every header and data cell.

    Row and column positions in the context are 1-indexed. Ragged rows are
    scanned as-is, so a column index may have no matching header.
    """
    results: List[SearchResult] = []
    query_lower = query.lower()

    for header in table.headers:
        if query_lower in header.lower():
            results.append(
                SearchResult(
                    document_id=document.id,
                    document_name=document.name,
                    content=header,
                    score=TABLE_HEADER_SCORE,
                    match_type=MatchType.TEXT,
                    context=f"Table header: {header}",
                )
            )

    for row_index, row in enumerate(table.rows, start=1):
        for col_index, cell in enumerate(row, start=1):
            if query_lower in cell.lower():
                results.append(
                    SearchResult(
                        document_id=document.id,
                        document_name=document.name,
                        content=cell,
                        score=TABLE_CELL_SCORE,
                        match_type=MatchType.TEXT,
                        context=f"Table cell (Row {row_index}, Col {col_index}): {cell}",
                    )
                )

    return results


def match_keywords(query: str, keywords: Sequence[str], document: Document) -> List[SearchResult]:
    query_lower = query.lower()
    return [
        SearchResult(
            document_id=document.id,
            document_name=document.name,
            content=keyword,
            score=KEYWORD_SCORE,
            match_type=MatchType.TEXT,
            context=f"Keyword: {keyword}",
        )
        for keyword in keywords
        if query_lower in keyword.lower()
    ]
