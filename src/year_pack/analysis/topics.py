"""Topic extraction: weekly documents -> TF-IDF -> K-Means -> named topics."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

import numpy as np

from year_pack.constants import (
    DEFAULT_TOPICS_COUNT,
    KMEANS_ITERATIONS,
    MAX_DF_RATIO,
    MIN_DF,
    MIN_QUESTIONS_FOR_TOPICS,
    MIN_TOPIC_SHARE,
    TOP_TERMS_PER_TOPIC,
)
from year_pack.logging_setup import get_logger
from year_pack.schemas import Cluster, SanitizedRecord, Topic, TopicTrend, WeekDocument

from .kmeans import kmeans_clustering
from .tfidf import calculate_tfidf
from .weekly import aggregate_by_week

log = get_logger(__name__)


def should_skip_topics(
    question_count: int, min_questions: int = MIN_QUESTIONS_FOR_TOPICS
) -> bool:
    return question_count < min_questions


def generate_topic_name(keywords: Sequence[str]) -> str:
    """``"Primary & secondary"`` from the top two keywords, hyphens as spaces."""
    if not keywords or not keywords[0]:
        return "General"
    primary = keywords[0].replace("-", " ")
    name = primary[0].upper() + primary[1:]
    if len(keywords) > 1 and keywords[1]:
        name = f"{name} & {keywords[1].replace('-', ' ')}"
    return name


def calculate_topic_trend(cluster: Cluster, documents: Sequence[WeekDocument]) -> TopicTrend:
    counts: Dict[str, int] = {"early": 0, "mid": 0, "late": 0}
    for idx in cluster.members:
        doc = documents[idx]
        counts[doc.period] += doc.question_count

    total = sum(counts.values())
    if total == 0:
        return TopicTrend()
    return TopicTrend(**{period: count / total for period, count in counts.items()})


def extract_topics(
    records: Sequence[SanitizedRecord],
    year: int,
    language: str = "en",
    k: int = DEFAULT_TOPICS_COUNT,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    *,
    min_questions: int = MIN_QUESTIONS_FOR_TOPICS,
    min_share: float = MIN_TOPIC_SHARE,
    min_df: int = MIN_DF,
    max_df_ratio: float = MAX_DF_RATIO,
    max_iterations: int = KMEANS_ITERATIONS,
    top_n: int = TOP_TERMS_PER_TOPIC,
) -> List[Topic]:
    """Discover up to ``k`` topics among the records of ``year``.

    Returns ``[]`` when the year has fewer than ``min_questions`` records;
    callers should say so in their notes. Topics are sorted by descending
    share with ids renumbered from 0. Pass ``seed`` (or an ``rng``) for
    reproducible results.
    """
    in_year = [r for r in records if r.timestamp.year == year]
    total_questions = len(in_year)
    if should_skip_topics(total_questions, min_questions):
        log.info(
            "Topic extraction skipped",
            year=year,
            questions=total_questions,
            min_questions=min_questions,
        )
        return []

    documents = aggregate_by_week(in_year, year)
    k = max(1, min(k, len(documents)))

    tfidf = calculate_tfidf(documents, language, min_df=min_df, max_df_ratio=max_df_ratio)
    if rng is None:
        rng = np.random.default_rng(seed)
    clusters = kmeans_clustering(tfidf.vectors, k, max_iterations, rng=rng, top_n=top_n)

    topics: List[Topic] = []
    dropped = 0
    for cluster in clusters:
        cluster_questions = sum(documents[idx].question_count for idx in cluster.members)
        share = cluster_questions / total_questions
        if share < min_share:
            dropped += 1
            continue
        topics.append(
            Topic(
                id=cluster.id,
                name=generate_topic_name(cluster.top_terms),
                share=share,
                keywords=list(cluster.top_terms),
                trend=calculate_topic_trend(cluster, documents),
            )
        )

    topics.sort(key=lambda t: t.share, reverse=True)
    topics = [topic.model_copy(update={"id": i}) for i, topic in enumerate(topics)]

    log.info(
        "Topics extracted",
        year=year,
        documents=len(documents),
        vocabulary=len(tfidf.vocabulary),
        k=k,
        topics=len(topics),
        dropped_small=dropped,
    )
    return topics
