"""Representative sample questions that are safe to show verbatim."""

from __future__ import annotations

from typing import List, Sequence

from year_pack.constants import (
    DEFAULT_MAX_SAMPLE_LENGTH,
    DEFAULT_MAX_SAMPLES,
    MIN_SAMPLE_CHARS,
)
from year_pack.schemas import SampleSet, SanitizedRecord
from year_pack.text.sanitizer import contains_sensitive_content, is_placeholder_only

from .stats import is_question_format


def _is_candidate(content: str, max_length: int) -> bool:
    if not MIN_SAMPLE_CHARS <= len(content) <= max_length:
        return False
    if contains_sensitive_content(content):
        return False
    return not is_placeholder_only(content)


def select_safe_samples(
    records: Sequence[SanitizedRecord],
    max_samples: int = DEFAULT_MAX_SAMPLES,
    max_sample_length: int = DEFAULT_MAX_SAMPLE_LENGTH,
) -> SampleSet:
    """Pick up to ``max_samples`` short, re-validated, distinct samples.

    Question-shaped text ranks first, then shorter text. Ordering is stable
    so identical input yields identical samples.
    """
    candidates = [r.content for r in records if _is_candidate(r.content, max_sample_length)]
    candidates.sort(key=lambda c: (not is_question_format(c), len(c)))

    selected: List[str] = []
    seen = set()
    for content in candidates:
        if len(selected) >= max_samples:
            break
        normalized = content.strip().lower()
        if normalized in seen:
            continue
        seen.add(normalized)
        selected.append(content)

    return SampleSet(questions=selected, max_length=max_sample_length)
