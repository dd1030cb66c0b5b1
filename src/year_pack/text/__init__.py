"""Text scrubbing and tokenization."""

from .sanitizer import contains_sensitive_content, get_applied_filters, sanitize
from .tokenizer import generate_bigrams, tokenize, tokenize_without_stopwords

__all__ = [
    "contains_sensitive_content",
    "generate_bigrams",
    "get_applied_filters",
    "sanitize",
    "tokenize",
    "tokenize_without_stopwords",
]
