"""Multi-source search over processed documents."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable, List, Sequence

from docscout.config import SORT_BY_NAME, SORT_BY_RELEVANCE, SearchOptions
from docscout.models import (
    AdvancedSearchCriteria,
    Document,
    Facets,
    MatchType,
    SearchResult,
)
from docscout.search.matchers import match_keywords, match_metadata, match_table, match_text
from docscout.search.scoring import (
    SUMMARY_SIMILARITY_THRESHOLD,
    TEXT_SIMILARITY_THRESHOLD,
    similarity,
)
from docscout.utils.text import SNIPPET_CHARS, extract_relevant_context

LOGGER = logging.getLogger(__name__)

UNKNOWN_LANGUAGE = "unknown"
FILTER_MATCH_SCORE = 1.0
SEMANTIC_MAX_RESULTS = 20


def sort_results(results: List[SearchResult], sort_by: str) -> List[SearchResult]:
    """Return ``results`` ordered by ``sort_by``; unknown keys keep the order."""
    if sort_by == SORT_BY_RELEVANCE:
        return sorted(results, key=lambda result: result.score, reverse=True)
    if sort_by == SORT_BY_NAME:
        return sorted(results, key=lambda result: result.document_name)
    return list(results)


class SearchEngine:
    """Stateless search engine; one instance can be shared freely."""

    def search(
        self,
        query: str,
        documents: Iterable[Document],
        options: SearchOptions | None = None,
    ) -> List[SearchResult]:
        """Find, score, filter, sort and cap matches for ``query``."""
        options = options or SearchOptions()
        if not query or not query.strip():
            return []

        candidates: List[SearchResult] = []
        for document in documents:
            candidates.extend(self._match_document(query, document, options))

        kept = [result for result in candidates if result.score >= options.threshold]
        results = sort_results(kept, options.sort_by)[: options.max_results]
        LOGGER.debug(
            "Query %r: %d candidates, %d above threshold, %d returned",
            query,
            len(candidates),
            len(kept),
            len(results),
        )
        return results

    def _match_document(
        self, query: str, document: Document, options: SearchOptions
    ) -> List[SearchResult]:
        results: List[SearchResult] = []

        if options.include_text and document.text:
            results.extend(match_text(query, document.text, document, MatchType.TEXT))

        if options.include_ocr:
            for image in document.images:
                if image.ocr_text:
                    results.extend(match_text(query, image.ocr_text, document, MatchType.OCR))

        if document.summary:
            results.extend(match_text(query, document.summary, document, MatchType.TEXT))

        if options.include_metadata:
            results.extend(match_metadata(query, document))

        for table in document.tables:
            results.extend(match_table(query, table, document))

        if document.keywords:
            results.extend(match_keywords(query, document.keywords, document))

        return results

    def semantic_search(
        self,
        query: str,
        documents: Iterable[Document],
        max_results: int = SEMANTIC_MAX_RESULTS,
    ) -> List[SearchResult]:
        """Rank documents by term-set overlap of their text and summary."""
        results: List[SearchResult] = []

        for document in documents:
            if document.text:
                score = similarity(query, document.text)
                if score > TEXT_SIMILARITY_THRESHOLD:
                    results.append(
                        SearchResult(
                            document_id=document.id,
                            document_name=document.name,
                            content=document.text[:SNIPPET_CHARS] + "...",
                            score=score,
                            match_type=MatchType.TEXT,
                            context=extract_relevant_context(query, document.text),
                        )
                    )

            if document.summary:
                score = similarity(query, document.summary)
                if score > SUMMARY_SIMILARITY_THRESHOLD:
                    results.append(
                        SearchResult(
                            document_id=document.id,
                            document_name=document.name,
                            content=document.summary,
                            score=score,
                            match_type=MatchType.TEXT,
                            context=document.summary,
                        )
                    )

        LOGGER.debug("Semantic query %r: %d hits", query, len(results))
        return sort_results(results, SORT_BY_RELEVANCE)[:max_results]

    def advanced_search(
        self,
        criteria: AdvancedSearchCriteria,
        documents: Iterable[Document],
    ) -> List[SearchResult]:
        """Filter the collection, then search it or list what survived."""
        selected = filter_documents(criteria, documents)

        if criteria.query and criteria.query.strip():
            return self.search(criteria.query, selected, criteria.options)

        return [
            SearchResult(
                document_id=document.id,
                document_name=document.name,
                content=document.summary or document.text[:SNIPPET_CHARS],
                score=FILTER_MATCH_SCORE,
                match_type=MatchType.TEXT,
                context=document.summary or "No summary available",
            )
            for document in selected
        ]

    def get_facets(self, documents: Iterable[Document]) -> Facets:
        """Count file types, languages, topics and authors across the corpus."""
        file_types: Counter[str] = Counter()
        languages: Counter[str] = Counter()
        topics: Counter[str] = Counter()
        authors: Counter[str] = Counter()

        for document in documents:
            file_types[document.file_type] += 1
            languages[document.metadata.language or UNKNOWN_LANGUAGE] += 1
            if document.metadata.author:
                authors[document.metadata.author] += 1
            for topic in document.topics or ():
                topics[topic] += 1

        return Facets(
            file_types=dict(file_types),
            languages=dict(languages),
            topics=dict(topics),
            authors=dict(authors),
        )


def filter_documents(
    criteria: AdvancedSearchCriteria, documents: Iterable[Document]
) -> List[Document]:
    """Apply the structured filters of ``criteria`` in order."""
    selected: Sequence[Document] = list(documents)

    if criteria.file_types:
        selected = [doc for doc in selected if doc.file_type in criteria.file_types]

    if criteria.date_range is not None:
        date_range = criteria.date_range
        selected = [
            doc for doc in selected if doc.upload_date is not None and doc.upload_date in date_range
        ]

    if criteria.size_range is not None:
        size_range = criteria.size_range
        selected = [doc for doc in selected if doc.size in size_range]

    if criteria.authors:
        selected = [doc for doc in selected if doc.metadata.author in criteria.authors]

    if criteria.languages:
        selected = [
            doc
            for doc in selected
            if (doc.metadata.language or UNKNOWN_LANGUAGE) in criteria.languages
        ]

    if criteria.topics:
        wanted = set(criteria.topics)
        selected = [doc for doc in selected if wanted.intersection(doc.topics or ())]

    return list(selected)
