"""Test loading chat exports from disk."""

import json
from datetime import datetime, timezone

import pytest

from year_pack.errors import RecordFormatError
from year_pack.records import load_records, parse_timestamp

MESSAGE_LINES = [
    {"role": "user", "content": "How do I configure logging?", "timestamp": "2025-03-01T10:00:00Z"},
    {"role": "assistant", "content": "Use structlog.", "timestamp": "2025-03-01T10:00:05Z"},
    {"role": "user", "content": "Old question from last year", "timestamp": "2024-12-31T10:00:00Z"},
    {"role": "user", "content": "Question without a timestamp"},
    {"role": "user", "text": "Epoch millis question", "timestamp": 1740823200000},
    {"role": "user", "content": "   ", "timestamp": "2025-03-02T10:00:00Z"},
]

SESSIONS = [
    {
        "timestamp": "2025-05-01T08:00:00+00:00",
        "workspace": "/w/a",
        "messages": [
            {"role": "user", "content": "Session question one"},
            {"role": "assistant", "content": "An answer"},
            {"role": "user", "content": "Session question two", "timestamp": "2025-05-02T08:00:00Z"},
        ],
    },
    {
        "timestamp": "2025-06-01T08:00:00Z",
        "workspace": "/w/b",
        "messages": [{"role": "user", "content": "Other workspace question"}],
    },
    {
        "timestamp": "2025-07-01T08:00:00Z",
        "messages": [{"role": "assistant", "content": "only assistant output"}],
    },
]


def _write_jsonl(path, items, extra_lines=()):
    lines = [json.dumps(item) for item in items] + list(extra_lines)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_parse_timestamp():
    expected = datetime(2025, 3, 1, 10, 0, tzinfo=timezone.utc)
    assert parse_timestamp("2025-03-01T10:00:00Z") == expected
    assert parse_timestamp(1740823200) == expected
    assert parse_timestamp(1740823200000) == expected
    assert parse_timestamp("not a date") is None
    assert parse_timestamp(None) is None
    assert parse_timestamp(True) is None
    assert parse_timestamp("") is None


def test_jsonl_messages(tmp_path):
    path = _write_jsonl(tmp_path / "export.jsonl", MESSAGE_LINES, extra_lines=["{not json"])
    loaded = load_records(path, 2025)

    assert [r.text for r in loaded.records] == ["How do I configure logging?", "Epoch millis question"]
    assert loaded.records[1].timestamp == datetime(2025, 3, 1, 10, 0, tzinfo=timezone.utc)
    assert loaded.session_count == 0
    assert loaded.skipped == 1
    assert loaded.capped is False


def test_json_array_of_sessions(tmp_path):
    path = tmp_path / "sessions.json"
    path.write_text(json.dumps(SESSIONS), encoding="utf-8")

    loaded = load_records(path, 2025)
    assert [r.text for r in loaded.records] == [
        "Session question one",
        "Session question two",
        "Other workspace question",
    ]
    # message inherits the session timestamp when it has none
    assert loaded.records[0].timestamp.month == 5
    assert loaded.records[1].timestamp.day == 2
    # the assistant-only session contributes no questions
    assert loaded.session_count == 2


def test_workspace_filter(tmp_path):
    path = tmp_path / "sessions.json"
    path.write_text(json.dumps(SESSIONS), encoding="utf-8")

    loaded = load_records(path, 2025, workspace="/w/a")
    assert len(loaded.records) == 2
    assert loaded.session_count == 1


def test_record_cap(tmp_path):
    path = tmp_path / "sessions.json"
    path.write_text(json.dumps(SESSIONS), encoding="utf-8")

    loaded = load_records(path, 2025, max_records=1)
    assert len(loaded.records) == 1
    assert loaded.capped is True


def test_other_year_excluded(tmp_path):
    path = _write_jsonl(tmp_path / "export.jsonl", MESSAGE_LINES)
    loaded = load_records(path, 2024)
    assert [r.text for r in loaded.records] == ["Old question from last year"]


def test_truncated_json_array_raises(tmp_path):
    path = tmp_path / "sessions.json"
    path.write_text(json.dumps(SESSIONS)[:-1] + ",", encoding="utf-8")

    with pytest.raises(RecordFormatError, match="not a valid JSON array"):
        load_records(path, 2025)


def test_malformed_jsonl_line_skipped(tmp_path):
    path = tmp_path / "export.jsonl"
    path.write_text(json.dumps(MESSAGE_LINES[0]) + "\n{not json\n", encoding="utf-8")

    loaded = load_records(path, 2025)
    assert [r.text for r in loaded.records] == ["How do I configure logging?"]
