"""Test topic extraction end to end over weekly documents."""

from datetime import datetime, timedelta, timezone

import pytest

from year_pack.analysis.weekly import get_period
from year_pack.analysis.topics import (
    calculate_topic_trend,
    extract_topics,
    generate_topic_name,
    should_skip_topics,
)
from year_pack.engine import process_records
from year_pack.schemas import Cluster, RawRecord, WeekDocument

SUBJECTS = [
    "react component state hooks rendering",
    "docker container image volume compose",
    "postgres query index migration schema",
    "kubernetes pod deployment cluster ingress",
    "pandas dataframe column merge groupby",
]
SUBJECT_TERMS = {term for subject in SUBJECTS for term in subject.split()}


def _subject_records(weeks=50, per_week=4, year=2025):
    """``weeks * per_week`` records, each subject owning a block of consecutive weeks."""
    start = datetime(year, 1, 6, 9, tzinfo=timezone.utc)  # a Monday
    block = weeks // len(SUBJECTS)
    raws = []
    for week in range(weeks):
        subject = SUBJECTS[min(week // block, len(SUBJECTS) - 1)]
        for j in range(per_week):
            raws.append(
                RawRecord(
                    text=f"Question about {subject} in week item?",
                    timestamp=start + timedelta(weeks=week, hours=j),
                )
            )
    return process_records(raws)


def _doc(week, count):
    return WeekDocument(week=week, year=2025, period=get_period(week), content="x", question_count=count)


def test_should_skip_topics():
    assert should_skip_topics(0)
    assert should_skip_topics(49)
    assert not should_skip_topics(50)
    assert not should_skip_topics(3, min_questions=3)


def test_topic_name():
    assert generate_topic_name(["react", "use-effect"]) == "React & use effect"
    assert generate_topic_name(["docker"]) == "Docker"
    assert generate_topic_name(["api-design", "rest"]) == "Api design & rest"
    assert generate_topic_name([]) == "General"


def test_topic_trend_weights_by_question_count():
    docs = [_doc(2, 3), _doc(20, 1), _doc(40, 4)]
    trend = calculate_topic_trend(Cluster(id=0, centroid={}, members=[0, 1, 2]), docs)
    assert trend.early == pytest.approx(3 / 8)
    assert trend.mid == pytest.approx(1 / 8)
    assert trend.late == pytest.approx(4 / 8)


def test_topic_trend_empty_cluster():
    trend = calculate_topic_trend(Cluster(id=0, centroid={}), [_doc(2, 3)])
    assert (trend.early, trend.mid, trend.late) == (0.0, 0.0, 0.0)


def test_below_threshold_returns_no_topics():
    records = _subject_records()[:49]
    assert extract_topics(records, 2025, seed=1) == []


def test_other_years_do_not_count_towards_threshold():
    records = _subject_records()
    assert extract_topics(records, 2024, seed=1) == []


def test_subject_clusters():
    records = _subject_records()
    assert len(records) == 200

    topics = extract_topics(records, 2025, "en", k=7, seed=42)

    assert 1 <= len(topics) <= 7
    assert [t.id for t in topics] == list(range(len(topics)))
    assert all(t.keywords for t in topics)
    assert all(0.02 <= t.share <= 1.0 for t in topics)
    assert sum(t.share for t in topics) <= 1.0 + 1e-9
    assert [t.share for t in topics] == sorted((t.share for t in topics), reverse=True)
    for topic in topics:
        total = topic.trend.early + topic.trend.mid + topic.trend.late
        assert 0.99 <= total <= 1.01
        assert set(topic.keywords) <= SUBJECT_TERMS


def test_seeded_topics_are_reproducible():
    records = _subject_records()
    assert extract_topics(records, 2025, k=5, seed=3) == extract_topics(records, 2025, k=5, seed=3)


def test_small_topics_dropped():
    records = _subject_records()
    topics = extract_topics(records, 2025, k=7, seed=42, min_share=0.5)
    assert all(t.share >= 0.5 for t in topics)
