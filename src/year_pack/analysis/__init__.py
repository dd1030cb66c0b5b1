"""Statistics, weekly aggregation, TF-IDF, K-Means and topic synthesis."""

from .kmeans import kmeans_clustering
from .samples import select_safe_samples
from .stats import calculate_stats, extract_keywords, process_record
from .tfidf import calculate_tfidf
from .topics import extract_topics, should_skip_topics
from .weekly import aggregate_by_week

__all__ = [
    "aggregate_by_week",
    "calculate_stats",
    "calculate_tfidf",
    "extract_keywords",
    "extract_topics",
    "kmeans_clustering",
    "process_record",
    "select_safe_samples",
    "should_skip_topics",
]
