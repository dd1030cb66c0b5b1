"""TF-IDF weighting over weekly documents.

Vectors are sparse ``term -> weight`` dicts sharing one vocabulary built
from the current corpus on every call.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import Dict, List, Sequence

from year_pack.constants import MAX_DF_RATIO, MIN_DF
from year_pack.logging_setup import get_logger
from year_pack.schemas import TfIdfResult, WeekDocument
from year_pack.text.tokenizer import tokenize_without_stopwords

log = get_logger(__name__)


def calculate_tf(tokens: Sequence[str]) -> Dict[str, float]:
    """Term counts normalized by document length."""
    length = len(tokens)
    return {term: count / length for term, count in Counter(tokens).items()}


def calculate_df(
    tokenized_docs: Sequence[Sequence[str]], min_df: int, max_df_ratio: float
) -> Dict[str, int]:
    """Document frequency of terms with ``min_df <= df <= floor(N * max_df_ratio)``.

    Keys keep first-seen order, which fixes the vocabulary order.
    """
    df: Counter[str] = Counter()
    for tokens in tokenized_docs:
        df.update(dict.fromkeys(tokens))

    max_df = math.floor(len(tokenized_docs) * max_df_ratio)
    return {term: count for term, count in df.items() if min_df <= count <= max_df}


def calculate_tfidf(
    documents: Sequence[WeekDocument],
    language: str = "en",
    min_df: int = MIN_DF,
    max_df_ratio: float = MAX_DF_RATIO,
) -> TfIdfResult:
    tokenized = [tokenize_without_stopwords(doc.content, language) for doc in documents]
    df = calculate_df(tokenized, min_df, max_df_ratio)
    n_docs = len(documents)

    vectors: List[Dict[str, float]] = []
    for tokens in tokenized:
        tf = calculate_tf(tokens) if tokens else {}
        vectors.append(
            {term: tf_val * math.log(n_docs / df[term]) for term, tf_val in tf.items() if term in df}
        )

    log.debug(
        "TF-IDF computed",
        documents=n_docs,
        vocabulary=len(df),
        min_df=min_df,
        max_df_ratio=max_df_ratio,
    )
    return TfIdfResult(vectors=vectors, vocabulary=list(df))
