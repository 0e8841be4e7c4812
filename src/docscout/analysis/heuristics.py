"""Lightweight content analysis used to enrich documents.

These are deterministic stand-ins for the summary, keyword, topic and timeline fields
an NLP service would normally provide. The search engine never calls them.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, List, Tuple

STOP_WORDS = frozenset(
    [
        "this", "that", "with", "have", "will", "from", "they", "been",
        "were", "said", "each", "which", "their", "time", "would", "about",
        "there", "could", "other", "more", "very", "what", "know", "just",
        "first", "into", "over", "after", "also", "back", "than", "only",
        "come", "before", "through", "where", "while",
    ]
)

TOPIC_VOCABULARY: Dict[str, Tuple[str, ...]] = {
    "Business": ("business", "company", "market", "revenue", "profit", "customer", "service", "product"),
    "Technology": ("technology", "software", "digital", "system", "data", "computer", "internet", "platform"),
    "Healthcare": ("health", "medical", "patient", "treatment", "doctor", "hospital", "medicine", "care"),
    "Education": ("education", "school", "student", "teacher", "learning", "university", "academic", "study"),
}
GENERAL_TOPIC = "General Content"

POSITIVE_WORDS = ("good", "great", "excellent", "amazing", "wonderful", "fantastic", "positive", "success", "happy", "love")
NEGATIVE_WORDS = ("bad", "terrible", "awful", "horrible", "negative", "failure", "sad", "hate", "problem", "issue")

_NON_WORD = re.compile(r"[^\w\s]")
_SENTENCE_END = re.compile(r"[.!?]+")

TIMELINE_SOURCE = "Document Analysis"
TIMELINE_CATEGORY = "General"
TIMELINE_CONTEXT_RADIUS = 50

_MONTHS = "January|February|March|April|May|June|July|August|September|October|November|December"
# (pattern, strptime formats tried after separators are normalized to "-")
_DATE_PATTERNS: Tuple[Tuple[re.Pattern[str], Tuple[str, ...]], ...] = (
    (re.compile(r"(?<!\d)\d{1,2}[/\-.]\d{1,2}[/\-.]\d{2,4}(?!\d)"), ("%m-%d-%Y", "%m-%d-%y")),
    (re.compile(r"(?<!\d)\d{4}[/\-.]\d{1,2}[/\-.]\d{1,2}(?!\d)"), ("%Y-%m-%d",)),
    (re.compile(rf"\b(?:{_MONTHS})\s+\d{{1,2}},?\s+\d{{4}}\b", re.IGNORECASE), ("%B %d %Y",)),
    (re.compile(rf"\b\d{{1,2}}\s+(?:{_MONTHS})\s+\d{{4}}\b", re.IGNORECASE), ("%d %B %Y",)),
)


def extract_keywords(text: str, max_keywords: int = 10) -> List[str]:
    """Most frequent words longer than three characters, minus stop words."""
    words = [word for word in _NON_WORD.sub("", text.lower()).split() if len(word) > 3]
    # Counter.most_common keeps first-seen order among equal counts
    frequencies = Counter(word for word in words if word not in STOP_WORDS)
    return [word for word, _ in frequencies.most_common(max_keywords)]


def extract_topics(text: str, max_topics: int = 5) -> List[str]:
    keywords = extract_keywords(text, 20)
    topics = [
        topic
        for topic, vocabulary in TOPIC_VOCABULARY.items()
        if any(word in keyword or keyword in word for keyword in keywords for word in vocabulary)
    ]
    if not topics:
        topics.append(GENERAL_TOPIC)
    return topics[:max_topics]


def summarize(text: str, max_length: int = 200) -> str:
    """Extractive summary built from the leading sentences."""
    sentences = [sentence for sentence in _SENTENCE_END.split(text) if sentence.strip()]
    if len(sentences) <= 2:
        return text

    summary = ". ".join(sentences[:3]).strip()
    if len(summary) > max_length:
        return summary[: max_length - 3] + "..."
    return summary + "."


@dataclass(slots=True)
class Sentiment:
    score: float
    label: str
    confidence: float


@dataclass(slots=True)
class ContentAnalysis:
    sentiment: Sentiment
    readability: float
    word_count: int
    character_count: int
    paragraph_count: int
    average_words_per_sentence: float
    lexical_diversity: float
    complexity: str


def analyze_sentiment(text: str) -> Sentiment:
    positive = negative = 0
    for word in text.lower().split():
        if any(marker in word for marker in POSITIVE_WORDS):
            positive += 1
        if any(marker in word for marker in NEGATIVE_WORDS):
            negative += 1

    total = positive + negative
    if total == 0:
        return Sentiment(score=0.0, label="neutral", confidence=0.5)

    score = (positive - negative) / total
    if score > 0.1:
        label = "positive"
    elif score < -0.1:
        label = "negative"
    else:
        label = "neutral"
    return Sentiment(score=score, label=label, confidence=min(0.95, abs(score) + 0.5))


def _count_syllables(text: str) -> int:
    letters = re.sub(r"[^a-z]", "", text.lower())
    return len(re.sub(r"[aeiouy]+", "a", letters))


def readability(text: str) -> float:
    """Simplified Flesch reading ease clamped to [0, 100]."""
    sentences = len(_SENTENCE_END.split(text))
    words = len(text.split())
    if sentences == 0 or words == 0:
        return 0.0
    score = 206.835 - 1.015 * (words / sentences) - 84.6 * (_count_syllables(text) / words)
    return max(0.0, min(100.0, score))


def average_words_per_sentence(text: str) -> float:
    sentences = [sentence for sentence in _SENTENCE_END.split(text) if sentence.strip()]
    words = text.split()
    return len(words) / len(sentences) if sentences else 0.0


def lexical_diversity(text: str) -> float:
    words = text.lower().split()
    return len(set(words)) / len(words) if words else 0.0


def assess_complexity(text: str) -> str:
    avg_words = average_words_per_sentence(text)
    diversity = lexical_diversity(text)
    if avg_words > 20 or diversity > 0.7:
        return "high"
    if avg_words > 15 or diversity > 0.5:
        return "medium"
    return "low"


def analyze_content(text: str) -> ContentAnalysis:
    return ContentAnalysis(
        sentiment=analyze_sentiment(text),
        readability=readability(text),
        word_count=len(text.split()),
        character_count=len(text),
        paragraph_count=len(text.split("\n\n")) if text else 0,
        average_words_per_sentence=average_words_per_sentence(text),
        lexical_diversity=lexical_diversity(text),
        complexity=assess_complexity(text),
    )


@dataclass(slots=True)
class TimelineEvent:
    id: str
    date: date
    title: str
    description: str
    source: str = TIMELINE_SOURCE
    category: str = TIMELINE_CATEGORY


def _parse_event_date(raw: str, formats: Tuple[str, ...]) -> date | None:
    cleaned = " ".join(re.sub(r"[/.]", "-", raw).replace(",", " ").split())
    for fmt in formats:
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue
    return None


def extract_timeline(text: str, max_events: int = 10) -> List[TimelineEvent]:
    """Dated events found in ``text``, oldest first.

    Each pattern is scanned in turn until ``max_events`` is reached. The
    description is the text within 50 characters on either side of where
    the date starts. Strings that look like dates but are not (``13/45/2023``)
    are skipped.
    """
    events: List[TimelineEvent] = []
    for pattern, formats in _DATE_PATTERNS:
        for match in pattern.finditer(text):
            if len(events) >= max_events:
                break
            parsed = _parse_event_date(match.group(), formats)
            if parsed is None:
                continue
            start = max(0, match.start() - TIMELINE_CONTEXT_RADIUS)
            number = len(events) + 1
            events.append(
                TimelineEvent(
                    id=f"event-{number}",
                    date=parsed,
                    title=f"Event {number}",
                    description=text[start : match.start() + TIMELINE_CONTEXT_RADIUS].strip(),
                )
            )
    return sorted(events, key=lambda event: event.date)
