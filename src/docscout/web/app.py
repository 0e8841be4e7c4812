"""FastAPI application exposing the DocScout search engine."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any, List

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from docscout.config import SORT_BY_RELEVANCE, AppConfig, SearchOptions
from docscout.ingestion.loader import load_corpus
from docscout.models import AdvancedSearchCriteria, DateRange, Document, SearchResult, SizeRange
from docscout.search.engine import SearchEngine

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="DocScout", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.corpus_path = None

app.state.engine = SearchEngine()


class OptionsPayload(BaseModel):
    include_text: bool = True
    include_ocr: bool = True
    include_metadata: bool = True
    sort_by: str = SORT_BY_RELEVANCE
    max_results: int = Field(50, ge=0)
    threshold: float = Field(0.1, ge=0.0, le=1.0)

    def to_options(self) -> SearchOptions:
        return SearchOptions(**self.model_dump())


class SearchPayload(BaseModel):
    query: str
    corpus: Path | None = None
    options: OptionsPayload = Field(default_factory=OptionsPayload)


class SemanticPayload(BaseModel):
    query: str
    corpus: Path | None = None
    max_results: int = Field(20, ge=0)


class AdvancedPayload(BaseModel):
    query: str | None = None
    corpus: Path | None = None
    file_types: List[str] = Field(default_factory=list)
    date_from: datetime | None = None
    date_to: datetime | None = None
    min_size: int | None = None
    max_size: int | None = None
    authors: List[str] = Field(default_factory=list)
    languages: List[str] = Field(default_factory=list)
    topics: List[str] = Field(default_factory=list)
    options: OptionsPayload = Field(default_factory=OptionsPayload)

    def to_criteria(self) -> AdvancedSearchCriteria:
        date_range = None
        if self.date_from is not None or self.date_to is not None:
            date_range = DateRange(
                start=self.date_from or datetime.min,
                end=self.date_to or datetime.max,
            )
        size_range = None
        if self.min_size is not None or self.max_size is not None:
            size_range = SizeRange(
                min=self.min_size if self.min_size is not None else 0,
                max=self.max_size if self.max_size is not None else 2**63 - 1,
            )
        return AdvancedSearchCriteria(
            query=self.query,
            file_types=self.file_types,
            date_range=date_range,
            size_range=size_range,
            authors=self.authors,
            languages=self.languages,
            topics=self.topics,
            options=self.options.to_options(),
        )


def _resolve_corpus_path(corpus: Path | None) -> Path:
    default = app.state.corpus_path or AppConfig().corpus_path
    config = AppConfig(corpus_path=corpus if corpus is not None else default)
    return config.resolve_corpus_path(Path.cwd())


def _load_documents(corpus: Path | None) -> List[Document]:
    resolved = _resolve_corpus_path(corpus)
    if not resolved.exists():
        raise HTTPException(
            status_code=404,
            detail=f"Corpus not found at {resolved}. "
            "Point 'corpus' at a JSON file or a directory of JSON files.",
        )
    return load_corpus([resolved])


def _serialize(results: List[SearchResult]) -> List[dict[str, Any]]:
    return [
        {
            "document_id": result.document_id,
            "document_name": result.document_name,
            "content": result.content,
            "score": round(result.score, 4),
            "match_type": result.match_type.value,
            "context": result.context,
        }
        for result in results
    ]


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


def get_engine(request: Request) -> SearchEngine:
    """Engine owned by the application serving ``request``."""
    return request.app.state.engine


@app.post("/search")
async def search_documents(
    payload: SearchPayload,
    engine: SearchEngine = Depends(get_engine),
) -> dict[str, Any]:
    # the engine sees the raw query; field matchers compare it verbatim
    if not payload.query.strip():
        raise HTTPException(status_code=400, detail="Empty query")

    documents = _load_documents(payload.corpus)
    results = await asyncio.to_thread(engine.search, payload.query, documents, payload.options.to_options())
    return {"results": _serialize(results)}


@app.post("/search/semantic")
async def semantic_search_documents(
    payload: SemanticPayload,
    engine: SearchEngine = Depends(get_engine),
) -> dict[str, Any]:
    if not payload.query.strip():
        raise HTTPException(status_code=400, detail="Empty query")

    documents = _load_documents(payload.corpus)
    results = await asyncio.to_thread(engine.semantic_search, payload.query, documents, payload.max_results)
    return {"results": _serialize(results)}


@app.post("/search/advanced")
async def advanced_search_documents(
    payload: AdvancedPayload,
    engine: SearchEngine = Depends(get_engine),
) -> dict[str, Any]:
    criteria = payload.to_criteria()
    documents = _load_documents(payload.corpus)
    try:
        results = await asyncio.to_thread(engine.advanced_search, criteria, documents)
    except TypeError as exc:
        # naive and aware datetimes cannot be compared
        LOGGER.warning("Advanced search rejected: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"results": _serialize(results)}


@app.get("/facets")
async def get_facets(
    corpus: Path | None = None,
    engine: SearchEngine = Depends(get_engine),
) -> dict[str, Any]:
    documents = _load_documents(corpus)
    return asdict(engine.get_facets(documents))


@app.get("/documents")
async def list_documents(corpus: Path | None = None) -> dict[str, Any]:
    """List all documents in the corpus."""
    documents = _load_documents(corpus)
    return {
        "documents": [
            {
                "id": document.id,
                "name": document.name,
                "file_type": document.file_type,
                "size": document.size,
            }
            for document in documents
        ],
        "count": len(documents),
    }
