"""Regex tokenization for keyword and topic extraction."""

import re
from typing import List

from .stopwords import get_stopwords

# Words may carry inner '-' / '_' so technical terms like "use-effect" or
# "snake_case" survive as one token.
TOKEN_PATTERN = re.compile(r"[a-z][a-z0-9_-]*[a-z0-9]|[a-z]{3,}")
MIN_TOKEN_LENGTH = 3


def tokenize(text: str) -> List[str]:
    """Lower-case ``text`` and return its terms of at least 3 characters."""
    if not text:
        return []
    return [t for t in TOKEN_PATTERN.findall(text.lower()) if len(t) >= MIN_TOKEN_LENGTH]


def tokenize_without_stopwords(text: str, language: str = "en") -> List[str]:
    stopwords = get_stopwords(language)
    return [t for t in tokenize(text) if t not in stopwords]


def generate_bigrams(tokens: List[str]) -> List[str]:
    """Adjacent pairs joined with a space: n tokens give n-1 bigrams."""
    return [f"{a} {b}" for a, b in zip(tokens, tokens[1:])]
