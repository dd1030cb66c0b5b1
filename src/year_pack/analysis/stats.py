"""Descriptive statistics and keyword frequency tables."""

from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Iterable, List, Literal, Sequence

from year_pack.constants import MAX_LINE_CHARS, TOP_BIGRAMS, TOP_UNIGRAMS
from year_pack.schemas import (
    ActivityStats,
    KeywordItem,
    KeywordTables,
    LengthBuckets,
    RawRecord,
    SanitizedRecord,
)
from year_pack.text.sanitizer import sanitize
from year_pack.text.tokenizer import generate_bigrams, tokenize_without_stopwords

SHORT_MAX_CHARS = 100
MEDIUM_MAX_CHARS = 280

QUESTION_WORDS = frozenset(
    [
        "how", "what", "why", "when", "where", "who", "which", "can", "could",
        "would", "should", "is", "are", "does", "do", "will",
    ]
)


def get_week_number(ts: datetime) -> int:
    """ISO-8601 week (Thursday anchored); Jan 1 can fall in week 52/53."""
    return ts.isocalendar()[1]


def month_key(ts: datetime) -> str:
    return f"{ts.year:04d}-{ts.month:02d}"


def process_record(raw: RawRecord, max_length: int = MAX_LINE_CHARS) -> SanitizedRecord:
    """Sanitize one raw record and tag it with month and week."""
    return SanitizedRecord(
        content=sanitize(raw.text, max_length),
        original_length=len(raw.text),
        timestamp=raw.timestamp,
        month=month_key(raw.timestamp),
        week=get_week_number(raw.timestamp),
    )


def get_length_bucket(length: int) -> Literal["short", "medium", "long"]:
    if length <= SHORT_MAX_CHARS:
        return "short"
    if length <= MEDIUM_MAX_CHARS:
        return "medium"
    return "long"


def calculate_stats(records: Sequence[SanitizedRecord]) -> ActivityStats:
    """Volume, cadence and length distribution.

    Buckets use the original (pre-sanitization) length. Months without
    records are absent from ``monthly_distribution``.
    """
    monthly: Counter[str] = Counter()
    buckets: Counter[str] = Counter()
    for record in records:
        monthly[record.month] += 1
        buckets[get_length_bucket(record.original_length)] += 1

    return ActivityStats(
        total_questions=len(records),
        active_months=len(monthly),
        monthly_distribution=dict(monthly),
        length_buckets=LengthBuckets(**buckets),
    )


def count_frequencies(terms: Iterable[str]) -> Counter[str]:
    return Counter(terms)


def get_top_terms(frequencies: Counter[str], n: int) -> List[KeywordItem]:
    """Top ``n`` terms by count; ties keep first-seen order."""
    if n <= 0:
        return []
    return [KeywordItem(term=term, count=count) for term, count in frequencies.most_common(n)]


def extract_keywords(
    texts: Iterable[str],
    language: str = "en",
    top_unigrams: int = TOP_UNIGRAMS,
    top_bigrams: int = TOP_BIGRAMS,
) -> KeywordTables:
    unigrams: List[str] = []
    bigrams: List[str] = []
    for text in texts:
        tokens = tokenize_without_stopwords(text, language)
        unigrams.extend(tokens)
        bigrams.extend(generate_bigrams(tokens))
    unigram_freq = count_frequencies(unigrams)
    bigram_freq = count_frequencies(bigrams)

    return KeywordTables(
        top_unigrams=get_top_terms(unigram_freq, top_unigrams),
        top_bigrams=get_top_terms(bigram_freq, top_bigrams),
    )


def is_question_format(text: str) -> bool:
    """True for text ending in '?' or starting with an interrogative word."""
    stripped = text.strip()
    if stripped.endswith("?"):
        return True
    words = stripped.lower().split()
    return bool(words) and words[0] in QUESTION_WORDS
