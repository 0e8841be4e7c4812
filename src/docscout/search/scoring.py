"""Relevance and similarity heuristics.

Term matches are scored as::

    score = 0.5                                  base
          + 0.3   if the context contains the term
          + min(0.2, 0.05 * occurrences in full text)
          + 0.1 * (1 - first_offset / len(full text))

and clamped to 1.0. Matches on structured fields skip the formula and use
fixed scores that encode how authoritative the source is
(title > author = keyword > table header > table cell).
"""

from __future__ import annotations

import re

from docscout.utils.text import normalize

BASE_SCORE = 0.5
EXACT_MATCH_BONUS = 0.3
FREQUENCY_STEP = 0.05
MAX_FREQUENCY_BONUS = 0.2
POSITION_WEIGHT = 0.1

TITLE_SCORE = 0.9
AUTHOR_SCORE = 0.8
KEYWORD_SCORE = 0.8
TABLE_HEADER_SCORE = 0.7
TABLE_CELL_SCORE = 0.6

TEXT_SIMILARITY_THRESHOLD = 0.1
SUMMARY_SIMILARITY_THRESHOLD = 0.2


def relevance_score(term: str, full_text: str, context: str) -> float:
    """Score a term match found in ``full_text``; result lies in [0, 1]."""
    score = BASE_SCORE
    if not term:
        return score
    pattern = re.compile(re.escape(term), re.IGNORECASE)

    # Always true for matcher output, kept for arbitrary callers.
    if pattern.search(context):
        score += EXACT_MATCH_BONUS

    occurrences = len(pattern.findall(full_text))
    score += min(MAX_FREQUENCY_BONUS, occurrences * FREQUENCY_STEP)

    first = pattern.search(full_text)
    if first is not None:
        score += (1 - first.start() / len(full_text)) * POSITION_WEIGHT

    return min(1.0, score)


def similarity(query: str, text: str) -> float:
    """Jaccard index between the term sets of ``query`` and ``text``."""
    query_terms = set(normalize(query))
    text_terms = set(normalize(text))
    union = query_terms | text_terms
    if not union:
        return 0.0
    return len(query_terms & text_terms) / len(union)
