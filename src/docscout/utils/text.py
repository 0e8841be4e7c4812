"""Text helpers: query normalization, context windows and snippets."""

from __future__ import annotations

import re
from typing import List, Sequence

CONTEXT_RADIUS = 75
SNIPPET_CHARS = 200
MIN_TERM_LENGTH = 3

_NON_ALNUM = re.compile(r"[^A-Za-z0-9\s]")
_SENTENCE_END = re.compile(r"[.!?]+")


def normalize(text: str) -> List[str]:
    """Lowercase ``text`` and split it into search terms.

    Punctuation becomes whitespace and terms shorter than three characters
    are dropped. No stemming and no stop-word removal happen here.

        >>> normalize("Q1 revenue, year-over-year!")
        ['revenue', 'year', 'over', 'year']
    """
    if not text:
        return []
    cleaned = _NON_ALNUM.sub(" ", text.lower())
    return [term for term in cleaned.split() if len(term) >= MIN_TERM_LENGTH]


def extract_context(text: str, position: int, match_length: int, *, radius: int = CONTEXT_RADIUS) -> str:
    """Return the window of ``text`` around a match, with ``...`` markers."""
    start = max(0, position - radius)
    end = min(len(text), position + match_length + radius)

    context = text[start:end]
    if start > 0:
        context = "..." + context
    if end < len(text):
        context = context + "..."
    return context


def split_sentences(text: str) -> List[str]:
    return _SENTENCE_END.split(text)


def extract_relevant_context(query: str, text: str) -> str:
    """Pick up to two sentences of ``text`` that mention a query term."""
    terms = normalize(query)
    relevant = [
        sentence
        for sentence in split_sentences(text)
        if any(term in sentence.lower() for term in terms)
    ]
    if relevant:
        return ". ".join(relevant[:2]).strip() + "."
    return text[:SNIPPET_CHARS] + "..."


def truncate_text(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[: max(max_length - 3, 0)] + "..."


def highlight(text: str, terms: Sequence[str], *, start: str = "<mark>", end: str = "</mark>") -> str:
    """Wrap every case-insensitive occurrence of ``terms`` with markers.

    The CLI passes rich markup tags as markers.
    """
    terms = [term for term in terms if term]
    if not terms:
        return text
    pattern = re.compile(
        "|".join(re.escape(term) for term in sorted(terms, key=len, reverse=True)),
        re.IGNORECASE,
    )
    return pattern.sub(lambda match: f"{start}{match.group(0)}{end}", text)
