# telemetry/logger.py
from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from settings import TELEMETRY_DB

DB_PATH = TELEMETRY_DB


def _conn() -> sqlite3.Connection:
    c = sqlite3.connect(DB_PATH)
    c.execute(
        """
        CREATE TABLE IF NOT EXISTS events (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            ts TEXT NOT NULL,
            session_id TEXT,
            event TEXT NOT NULL,
            payload TEXT NOT NULL
        )
        """
    )
    c.execute("CREATE INDEX IF NOT EXISTS ix_events_session ON events (session_id, id)")
    c.commit()
    return c


def log_event(event: str, payload: Dict[str, Any], session_id: Optional[str] = None) -> None:
    """
    Telemetry must NEVER crash conversation logic.
    Payload should avoid raw user text (answers are personal data).
    """
    try:
        ts = datetime.now(timezone.utc).isoformat()
        with _conn() as c:
            c.execute(
                "INSERT INTO events (ts, session_id, event, payload) VALUES (?, ?, ?, ?)",
                (ts, session_id, event, json.dumps(payload, ensure_ascii=False)),
            )
            c.commit()
    except Exception as e:
        print(f"[DEBUG] telemetry write failed for {event}: {e}")


def recent_events(limit: int = 50, session_id: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Oldest-first tail of the event log. With `session_id`, only that
    conversation's trail (what GET /sessions/{id}/events serves).
    """
    sql = "SELECT ts, session_id, event, payload FROM events"
    args: tuple = ()
    if session_id is not None:
        sql += " WHERE session_id = ?"
        args = (session_id,)
    sql += " ORDER BY id DESC LIMIT ?"

    try:
        with _conn() as c:
            rows = c.execute(sql, args + (limit,)).fetchall()
    except Exception as e:
        print(f"[DEBUG] telemetry read failed: {e}")
        return []
    return [
        {"ts": ts, "session_id": sid, "event": ev, "payload": json.loads(payload)}
        for ts, sid, ev, payload in reversed(rows)
    ]


def forget_session(session_id: str) -> int:
    """Drop a deleted conversation's trail. Returns rows removed (0 on failure)."""
    try:
        with _conn() as c:
            cur = c.execute("DELETE FROM events WHERE session_id = ?", (session_id,))
            c.commit()
            return cur.rowcount
    except Exception as e:
        print(f"[DEBUG] telemetry purge failed for {session_id}: {e}")
        return 0
