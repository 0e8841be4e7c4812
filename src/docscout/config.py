"""Application configuration defaults."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path

SORT_BY_RELEVANCE = "relevance"
SORT_BY_NAME = "name"


def _get_default_corpus_path() -> Path:
    """Get the default corpus path based on platform and execution context."""
    user_corpus = Path.home() / "Documents" / "DocScout" / "corpus.json"

    # When running as a frozen app (PyInstaller bundle)
    if getattr(sys, "frozen", False):
        return user_corpus

    # When running from source, prefer local data/ if it exists
    local_corpus = Path("data/corpus.json")
    if local_corpus.exists():
        return local_corpus

    return user_corpus


@dataclass(slots=True)
class SearchOptions:
    """Knobs for a single search call.

    ``sort_by`` accepts ``"relevance"`` (descending score) or ``"name"``
    (ascending document name); any other value keeps discovery order.
    """

    include_text: bool = True
    include_ocr: bool = True
    include_metadata: bool = True
    sort_by: str = SORT_BY_RELEVANCE
    max_results: int = 50
    threshold: float = 0.1

    def __post_init__(self) -> None:
        if self.max_results < 0:
            raise ValueError(f"max_results must be >= 0, got {self.max_results}")
        if not 0.0 <= self.threshold <= 1.0:
            raise ValueError(f"threshold must be within [0, 1], got {self.threshold}")


@dataclass(slots=True)
class AppConfig:
    corpus_path: Path | None = None
    search: SearchOptions = field(default_factory=SearchOptions)

    def __post_init__(self) -> None:
        if self.corpus_path is None:
            self.corpus_path = _get_default_corpus_path()

    def resolve_corpus_path(self, base_dir: Path | None = None) -> Path:
        if self.corpus_path is None:
            self.corpus_path = _get_default_corpus_path()
        if Path(self.corpus_path).is_absolute() or base_dir is None:
            return Path(self.corpus_path)
        return base_dir / self.corpus_path
