"""Core DocScout data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple

from docscout.config import SearchOptions


class MatchType(str, Enum):
    """Origin of a search hit."""

    TEXT = "text"
    OCR = "ocr"
    METADATA = "metadata"


@dataclass(frozen=True, slots=True)
class Image:
    """Image embedded in a document, with OCR text when available."""

    id: str
    uri: str = ""
    ocr_text: Optional[str] = None
    description: Optional[str] = None
    width: int = 0
    height: int = 0


@dataclass(frozen=True, slots=True)
class Table:
    """Extracted table. Rows are expected to match the header length."""

    id: str
    headers: Tuple[str, ...] = ()
    rows: Tuple[Tuple[str, ...], ...] = ()
    title: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Metadata:
    title: Optional[str] = None
    author: Optional[str] = None
    created_date: Optional[datetime] = None
    modified_date: Optional[datetime] = None
    page_count: Optional[int] = None
    word_count: Optional[int] = None
    language: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Document:
    """Processed document as produced by the ingestion pipeline."""

    id: str
    name: str
    text: str = ""
    images: Tuple[Image, ...] = ()
    tables: Tuple[Table, ...] = ()
    metadata: Metadata = field(default_factory=Metadata)
    summary: Optional[str] = None
    keywords: Optional[Tuple[str, ...]] = None
    topics: Optional[Tuple[str, ...]] = None
    file_type: str = "other"
    size: int = 0
    upload_date: Optional[datetime] = None


@dataclass(slots=True)
class SearchResult:
    """A single hit returned by the search engine."""

    document_id: str
    document_name: str
    content: str
    score: float
    match_type: MatchType
    context: str


@dataclass(slots=True)
class Facets:
    """Corpus-wide occurrence counts per categorical attribute."""

    file_types: Dict[str, int] = field(default_factory=dict)
    languages: Dict[str, int] = field(default_factory=dict)
    topics: Dict[str, int] = field(default_factory=dict)
    authors: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class DateRange:
    """Inclusive upload-date bounds."""

    start: datetime
    end: datetime

    def __contains__(self, value: datetime) -> bool:
        return self.start <= value <= self.end


@dataclass(frozen=True, slots=True)
class SizeRange:
    """Inclusive size bounds in bytes."""

    min: int
    max: int

    def __contains__(self, value: int) -> bool:
        return self.min <= value <= self.max


@dataclass(slots=True)
class AdvancedSearchCriteria:
    query: Optional[str] = None
    file_types: List[str] = field(default_factory=list)
    date_range: Optional[DateRange] = None
    size_range: Optional[SizeRange] = None
    authors: List[str] = field(default_factory=list)
    languages: List[str] = field(default_factory=list)
    topics: List[str] = field(default_factory=list)
    # ``None`` means the default ``SearchOptions``
    options: Optional[SearchOptions] = None
