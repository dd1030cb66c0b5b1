"""Boundary to the external chat record store.

The engine never talks to storage itself; it receives a materialized list of
RawRecord for one year. This module reads such an export from disk (a JSON
array or JSON Lines) and performs the caller-side duties: keep end-user
messages only, resolve timestamps, keep the target year, cap the volume.

Accepted items, per array element or per JSONL line::

    {"role": "user", "content": "...", "timestamp": "2025-03-01T10:00:00Z"}
    {"timestamp": 1735725600, "workspace": "/projects/app",
     "messages": [{"role": "user", "content": "..."}, ...]}

A message without its own timestamp inherits the session's; messages with
no timestamp at all are skipped.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from dateutil import parser as dt_parser
from pydantic import BaseModel

from year_pack.constants import MAX_RECORDS
from year_pack.errors import RecordFormatError
from year_pack.logging_setup import get_logger
from year_pack.schemas import RawRecord

log = get_logger(__name__)

USER_ROLES = frozenset(["user", "human"])

# Epoch values above this are taken as milliseconds.
_EPOCH_MS_THRESHOLD = 1e12


class LoadedRecords(BaseModel):
    records: List[RawRecord]
    session_count: int = 0
    skipped: int = 0
    capped: bool = False


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse ISO strings and epoch seconds/milliseconds; None when unusable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)):
        seconds = value / 1000 if value > _EPOCH_MS_THRESHOLD else value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str) and value.strip():
        try:
            return dt_parser.isoparse(value.strip())
        except ValueError:
            try:
                return dt_parser.parse(value.strip())
            except (ValueError, OverflowError):
                return None
    return None


def _is_user_message(message: dict) -> bool:
    role = message.get("role")
    return role is None or str(role).lower() in USER_ROLES


def _message_text(message: dict) -> str:
    text = message.get("content", message.get("text"))
    return text if isinstance(text, str) else ""


def iter_items(path: Path) -> Iterator[Tuple[int, Any]]:
    """Yield ``(position, item)`` from a JSON array or JSON Lines file.

    Malformed JSONL lines are logged and skipped. A JSON array export is
    parsed as a whole, so a malformed one raises RecordFormatError.
    """
    raw = path.read_text(encoding="utf-8")
    stripped = raw.lstrip()
    if stripped.startswith("["):
        try:
            data = json.loads(stripped)
        except json.JSONDecodeError as e:
            log.error("Malformed record export", path=str(path), error=str(e))
            raise RecordFormatError(f"{path}: not a valid JSON array ({e})") from e
        yield from enumerate(data, start=1)
        return
    for line_no, line in enumerate(raw.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            yield line_no, json.loads(line)
        except json.JSONDecodeError as e:
            log.warning("Skipping malformed record line", path=str(path), line=line_no, error=str(e))


def extract_user_records(
    items: Iterable[Tuple[int, Any]],
    year: int,
    workspace: Optional[str] = None,
    max_records: int = MAX_RECORDS,
) -> LoadedRecords:
    """Flatten sessions/messages into RawRecords of end-user text in ``year``."""
    records: List[RawRecord] = []
    sessions = 0
    skipped = 0

    for position, item in items:
        if not isinstance(item, dict):
            skipped += 1
            log.warning("Skipping non-object record", position=position)
            continue

        if isinstance(item.get("messages"), list):
            if workspace and item.get("workspace") != workspace:
                continue
            session_ts = parse_timestamp(item.get("timestamp"))
            messages = item["messages"]
            contributed = False
        else:
            if workspace and item.get("workspace") not in (None, workspace):
                continue
            session_ts = None
            messages = [item]
            contributed = True  # loose messages do not count as sessions

        for message in messages:
            if not isinstance(message, dict) or not _is_user_message(message):
                continue
            text = _message_text(message)
            if not text.strip():
                continue
            ts = parse_timestamp(message.get("timestamp")) or session_ts
            if ts is None:
                skipped += 1
                continue
            if ts.year != year:
                continue
            if len(records) >= max_records:
                log.warning("Record cap reached", max_records=max_records, year=year)
                return LoadedRecords(
                    records=records, session_count=sessions, skipped=skipped, capped=True
                )
            records.append(RawRecord(text=text, timestamp=ts))
            if not contributed:
                sessions += 1
                contributed = True

    return LoadedRecords(records=records, session_count=sessions, skipped=skipped)


def load_records(
    path: str | Path,
    year: int,
    workspace: Optional[str] = None,
    max_records: int = MAX_RECORDS,
) -> LoadedRecords:
    path = Path(path)
    loaded = extract_user_records(iter_items(path), year, workspace, max_records)
    log.info(
        "Records loaded",
        path=str(path),
        year=year,
        records=len(loaded.records),
        sessions=loaded.session_count,
        skipped=loaded.skipped,
        capped=loaded.capped,
    )
    return loaded
