"""Shared fixtures for DocScout tests."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

import pytest

from docscout.models import Document, Image, Metadata, Table


@pytest.fixture
def report_document() -> Document:
    return Document(
        id="doc-1",
        name="report.pdf",
        text="The quarterly revenue report shows revenue growth in Q1 2023.",
        images=(Image(id="img-1", ocr_text="Revenue chart for the quarter"),),
        tables=(Table(id="t1", headers=("Name", "Amount"), rows=(("Alice", "100"), ("Bob", "200"))),),
        metadata=Metadata(title="Quarterly Revenue", author="Finance Team", language="en"),
        summary="Revenue overview for the first quarter",
        keywords=("revenue", "growth"),
        topics=("Business",),
        file_type="pdf",
        size=2048,
        upload_date=datetime(2023, 4, 2, 10, 0),
    )


@pytest.fixture
def recipe_document() -> Document:
    return Document(
        id="doc-2",
        name="recipes.docx",
        text="Slow cooked stew with carrots and onions.",
        metadata=Metadata(title="Cooking recipes", author="Chef Ana"),
        summary="Cooking recipes for dinner",
        topics=("Cooking", "Business"),
        file_type="docx",
        size=512,
        upload_date=datetime(2023, 6, 15, 8, 30),
    )


@pytest.fixture
def documents(report_document: Document, recipe_document: Document) -> List[Document]:
    return [report_document, recipe_document]


@pytest.fixture
def corpus_records() -> List[Dict[str, Any]]:
    return [
        {
            "id": "doc-1",
            "name": "report.pdf",
            "file_type": "pdf",
            "size": 2048,
            "upload_date": "2023-04-02T10:00:00",
            "text": "The quarterly revenue report shows revenue growth in Q1 2023.",
            "images": [{"id": "img-1", "ocr_text": "Revenue chart"}],
            "tables": [
                {"id": "t1", "headers": ["Name", "Amount"], "rows": [["Alice", "100"], ["Bob", "200"]]}
            ],
            "metadata": {"title": "Quarterly Revenue", "author": "Finance Team", "language": "en"},
            "summary": "Revenue overview",
            "keywords": ["revenue", "growth"],
            "topics": ["Business"],
        },
        {
            "id": "doc-2",
            "name": "recipes.docx",
            "file_type": "docx",
            "size": 512,
            "upload_date": "2023-06-15T08:30:00",
            "text": "Slow cooked stew with carrots and onions.",
            "metadata": {"author": "Chef Ana"},
        },
    ]


@pytest.fixture
def corpus_file(tmp_path: Path, corpus_records: List[Dict[str, Any]]) -> Path:
    path = tmp_path / "corpus.json"
    path.write_text(json.dumps(corpus_records), encoding="utf-8")
    return path
