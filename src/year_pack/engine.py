"""Year pack assembly: raw records in, sanitized aggregate out.

The engine is a pure function of its inputs plus the clock (``generatedAt``)
and the k-means++ seed. It raises only ConfigurationError, and only before
any processing starts; empty input is reported as ``status="no_data"``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Sequence, Union

import numpy as np

from year_pack.analysis.samples import select_safe_samples
from year_pack.analysis.stats import calculate_stats, extract_keywords, process_record
from year_pack.analysis.topics import extract_topics, should_skip_topics
from year_pack.constants import DEFAULT_NOTES, MAX_LINE_CHARS, MIN_QUESTION_CHARS, SAFETY_GUARANTEES
from year_pack.logging_setup import get_logger
from year_pack.schemas import (
    RawRecord,
    SafetyInfo,
    SanitizedRecord,
    YearPack,
    YearPackInput,
    YearPackMeta,
    YearPackResult,
    YearPackStats,
    validate_input,
)
from year_pack.settings import EngineConfig
from year_pack.text.sanitizer import get_applied_filters

log = get_logger(__name__)


def process_records(
    raws: Sequence[RawRecord], max_length: int = MAX_LINE_CHARS
) -> List[SanitizedRecord]:
    """Sanitize every record, dropping those left with almost no text."""
    processed = []
    for raw in raws:
        record = process_record(raw, max_length)
        if len(record.content.strip()) < MIN_QUESTION_CHARS:
            continue
        processed.append(record)
    return processed


def _generated_at(now: Optional[datetime]) -> str:
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_year_pack(
    records: Sequence[SanitizedRecord],
    config: YearPackInput,
    session_count: int = 0,
    now: Optional[datetime] = None,
    engine: Optional[EngineConfig] = None,
) -> YearPack:
    """Assemble the YearPack from already sanitized records."""
    engine = engine or EngineConfig()
    records = [r for r in records if r.timestamp.year == config.year]

    stats = calculate_stats(records)
    keywords = extract_keywords(
        (r.content for r in records),
        config.language,
        engine.top_unigrams,
        engine.top_bigrams,
    )

    topics = extract_topics(
        records,
        config.year,
        config.language,
        config.topics_count,
        rng=np.random.default_rng(config.seed),
        min_questions=engine.min_questions_for_topics,
        min_share=engine.min_topic_share,
        min_df=engine.min_df,
        max_df_ratio=engine.max_df_ratio,
        max_iterations=engine.kmeans_iterations,
        top_n=engine.top_terms_per_topic,
    )
    samples = select_safe_samples(records, config.max_samples, config.max_sample_length)

    notes = list(DEFAULT_NOTES)
    if should_skip_topics(len(records), engine.min_questions_for_topics):
        notes.append(
            f"Topic extraction skipped: fewer than {engine.min_questions_for_topics} "
            f"questions ({len(records)} found)."
        )

    return YearPack(
        meta=YearPackMeta(
            year=config.year,
            language=config.language,
            generated_at=_generated_at(now),
            workspace=config.workspace,
            question_count=stats.total_questions,
            session_count=session_count,
        ),
        stats=YearPackStats(
            total_questions=stats.total_questions,
            active_months=stats.active_months,
            monthly_distribution=stats.monthly_distribution,
        ),
        length_buckets=stats.length_buckets,
        keywords=keywords,
        topics=topics,
        samples=samples,
        safety=SafetyInfo(
            filters_applied=get_applied_filters(),
            guarantees=list(SAFETY_GUARANTEES),
        ),
        notes=notes,
    )


def generate_year_pack(
    raw_records: Sequence[RawRecord],
    args: Union[YearPackInput, Mapping[str, Any], None] = None,
    session_count: int = 0,
    engine: Optional[EngineConfig] = None,
    now: Optional[datetime] = None,
) -> YearPackResult:
    """Validate ``args``, then sanitize and analyze ``raw_records``.

    Raises:
        ConfigurationError: if ``args`` violates the input bounds.
    """
    config = args if isinstance(args, YearPackInput) else validate_input(args)
    engine = engine or EngineConfig()
    where = f' in workspace "{config.workspace}"' if config.workspace else ""

    in_year = [r for r in raw_records if r.timestamp.year == config.year]
    if len(in_year) < len(raw_records):
        log.info(
            "Dropped records outside year",
            year=config.year,
            dropped=len(raw_records) - len(in_year),
        )
    raw_records = in_year

    if not raw_records:
        log.info("No records for year", year=config.year, workspace=config.workspace)
        return YearPackResult(
            status="no_data",
            message=(
                f"No chat sessions found for year {config.year}{where}. "
                "Make sure chat history exists for this period."
            ),
        )

    records = process_records(raw_records, engine.max_line_chars)
    if not records:
        log.info("No usable questions", year=config.year, raw_records=len(raw_records))
        return YearPackResult(
            status="no_data",
            message=(
                f"Found {session_count} session(s) for year {config.year}, but no user "
                "questions were extracted. Sessions may only contain assistant "
                "responses or tool calls."
            ),
        )

    year_pack = build_year_pack(records, config, session_count, now=now, engine=engine)
    log.info(
        "Year pack built",
        year=config.year,
        language=config.language,
        raw_records=len(raw_records),
        questions=len(records),
        topics=len(year_pack.topics),
        samples=len(year_pack.samples.questions),
    )
    return YearPackResult(
        status="ok",
        year_pack=year_pack,
        message=f"Year pack generated for {config.year} from {len(records)} question(s).",
    )
