"""Load processed documents from JSON corpus files.

A corpus file holds either a JSON array of document objects or an object
with a ``documents`` array. Keys mirror the fields of
:class:`docscout.models.Document`; dates are ISO-8601 strings.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional

from docscout.analysis.heuristics import extract_keywords, extract_topics, summarize
from docscout.models import Document, Image, Metadata, Table

LOGGER = logging.getLogger(__name__)


class CorpusFormatError(ValueError):
    """Raised when a document record cannot be turned into a Document."""


def iter_corpus_paths(inputs: Iterable[Path]) -> Iterator[Path]:
    """Yield JSON corpus paths from input paths, descending into directories."""
    for item in inputs:
        if item.is_dir():
            yield from iter_corpus_paths(sorted(child for child in item.rglob("*.json")))
        elif item.is_file() and item.suffix.lower() == ".json":
            yield item


def _parse_date(value: Any) -> Optional[datetime]:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value))
    except ValueError as exc:
        raise CorpusFormatError(f"Invalid date: {value!r}") from exc


def _strings(values: Any) -> tuple[str, ...]:
    return tuple(str(value) for value in values or ())


def _build_metadata(raw: Dict[str, Any]) -> Metadata:
    return Metadata(
        title=raw.get("title"),
        author=raw.get("author"),
        created_date=_parse_date(raw.get("created_date")),
        modified_date=_parse_date(raw.get("modified_date")),
        page_count=raw.get("page_count"),
        word_count=raw.get("word_count"),
        language=raw.get("language"),
    )


def _build_table(raw: Dict[str, Any], position: int) -> Table:
    return Table(
        id=str(raw.get("id", position)),
        headers=_strings(raw.get("headers")),
        rows=tuple(_strings(row) for row in raw.get("rows") or ()),
        title=raw.get("title"),
    )


def _build_image(raw: Dict[str, Any], position: int) -> Image:
    return Image(
        id=str(raw.get("id", position)),
        uri=raw.get("uri", ""),
        ocr_text=raw.get("ocr_text"),
        description=raw.get("description"),
        width=int(raw.get("width") or 0),
        height=int(raw.get("height") or 0),
    )


def parse_document(raw: Dict[str, Any]) -> Document:
    """Build a Document from one JSON record."""
    if not isinstance(raw, dict):
        raise CorpusFormatError(f"Expected an object, got {type(raw).__name__}")
    try:
        doc_id = str(raw["id"])
        name = str(raw["name"])
    except KeyError as exc:
        raise CorpusFormatError(f"Missing required field {exc.args[0]!r}") from exc

    keywords = raw.get("keywords")
    topics = raw.get("topics")
    return Document(
        id=doc_id,
        name=name,
        text=raw.get("text") or "",
        images=tuple(_build_image(image, i) for i, image in enumerate(raw.get("images") or ())),
        tables=tuple(_build_table(table, i) for i, table in enumerate(raw.get("tables") or ())),
        metadata=_build_metadata(raw.get("metadata") or {}),
        summary=raw.get("summary"),
        keywords=_strings(keywords) if keywords is not None else None,
        topics=_strings(topics) if topics is not None else None,
        file_type=raw.get("file_type") or "other",
        size=int(raw.get("size") or 0),
        upload_date=_parse_date(raw.get("upload_date")),
    )


def _iter_records(path: Path) -> Iterator[Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        LOGGER.error("Failed to read corpus %s: %s", path, exc)
        return

    if isinstance(payload, dict):
        payload = payload.get("documents", [])
    if not isinstance(payload, list):
        LOGGER.error("Corpus %s does not contain a document list", path)
        return
    yield from payload


def load_corpus(paths: Iterable[Path], *, enrich: bool = False) -> List[Document]:
    """Load every document found in the corpus files under ``paths``."""
    documents: List[Document] = []
    for path in iter_corpus_paths(paths):
        loaded = 0
        for position, raw in enumerate(_iter_records(path)):
            try:
                document = parse_document(raw)
            except (CorpusFormatError, TypeError, ValueError) as exc:
                LOGGER.warning("Skipping record %d in %s: %s", position, path, exc)
                continue
            documents.append(enrich_document(document) if enrich else document)
            loaded += 1
        LOGGER.info("Loaded %d documents from %s", loaded, path)
    return documents


def enrich_document(document: Document) -> Document:
    """Fill missing summary, keywords and topics from the document text."""
    changes: Dict[str, Any] = {}
    if not document.summary and document.text:
        changes["summary"] = summarize(document.text)
    if document.keywords is None:
        changes["keywords"] = tuple(extract_keywords(document.text))
    if document.topics is None:
        changes["topics"] = tuple(extract_topics(document.text))
    if not changes:
        return document
    return dataclasses.replace(document, **changes)
