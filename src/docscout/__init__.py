"""DocScout - relevance search across processed documents."""

from docscout.config import AppConfig, SearchOptions
from docscout.models import Document, Facets, MatchType, SearchResult
from docscout.search.engine import SearchEngine

__all__ = [
    "AppConfig",
    "Document",
    "Facets",
    "MatchType",
    "SearchEngine",
    "SearchOptions",
    "SearchResult",
]

__version__ = "0.1.0"
