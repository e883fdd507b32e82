from __future__ import annotations

import csv
import io
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from . import config
from .production import ComparisonPair


def new_session_id() -> str:
    return uuid.uuid4().hex[:12]


def _safe_session_id(session_id: Optional[str]) -> str:
    return session_id if isinstance(session_id, str) and session_id else "unknown"


def next_seq_and_elapsed(previous: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Continue the numbering of the record that precedes this one, if any."""
    now_ms = int(time.time() * 1000)
    seq = 1
    elapsed = 0
    if isinstance(previous, Mapping):
        try:
            seq = int(previous.get("seq", 0)) + 1
        except (TypeError, ValueError):
            seq = 1
        last_ms = previous.get("t_server_ms")
        if isinstance(last_ms, (int, float)):
            elapsed = max(now_ms - int(last_ms), 0)
    ts = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return {"seq": seq, "elapsed_time_ms": elapsed, "t_server_iso": ts, "t_server_ms": now_ms}


def build_event_record(
    session_id: str,
    *,
    event: str,
    params: Mapping[str, float],
    comparison: ComparisonPair,
    param_name: Optional[str] = None,
    old_value: Optional[float] = None,
    new_value: Optional[float] = None,
    source: str = "slider",
    previous: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    safe_id = _safe_session_id(session_id)
    record: Dict[str, Any] = {
        "schema_version": config.SCHEMA_VERSION,
        "session_id": safe_id,
        "event": event,
        "function_type": config.FUNCTION_TYPE,
        "param_name": param_name,
        "old_value": old_value,
        "new_value": new_value,
        "source": source,
        "current_output": comparison.current_output,
        "baseline_output": comparison.baseline_output,
        "mode": config.APP_MODE,
    }
    for name in config.PARAM_NAMES:
        record[name] = params.get(name)
    record.update(next_seq_and_elapsed(previous))
    return record


def format_preview_message(record: Mapping[str, Any]) -> str:
    seq = record.get("seq", "?")
    event = record.get("event")
    if event == "param_change":
        symbol = config.PARAM_SYMBOLS.get(record.get("param_name"), "?")
        return (
            f"#{seq} {symbol}: {record.get('old_value')} → {record.get('new_value')} "
            f"(Y = {record.get('current_output', 0.0):.2f})"
        )
    return f"#{seq} {event}"


def append_preview_log(log_data: Any, message: str) -> List[str]:
    entries = list(log_data) if isinstance(log_data, list) else []
    entries.append(message)
    return entries[-config.RECENT_LOG_CAPACITY:]


def flatten_record_for_csv(record: Mapping[str, Any]) -> Dict[str, Any]:
    flat = dict.fromkeys(config.SCHEMA_COLUMNS, None)
    for key, value in record.items():
        if key in flat:
            flat[key] = value
    return flat


def build_csv_content(records: List[Dict[str, Any]]) -> Optional[str]:
    if not records:
        return None
    columns = list(config.SCHEMA_COLUMNS)
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=columns, extrasaction="ignore")
    writer.writeheader()
    for record in records:
        if not isinstance(record, Mapping):
            continue
        writer.writerow(flatten_record_for_csv(record))
    return buffer.getvalue()
