"""SQLite-backed usage log storage (the prompt counter)."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from pathlib import Path

from linguist.logging.models import UsageLog

DEFAULT_DB_PATH = Path.home() / ".linguist" / "usage.db"

_COLUMNS = (
    "id",
    "timestamp",
    "mode",
    "model",
    "tone",
    "total_input_tokens",
    "total_output_tokens",
    "search_count",
    "suggestion_count",
    "elapsed_seconds",
    "estimated_cost_usd",
    "success",
    "error_message",
)


class UsageStore:
    """SQLite store for AI usage logs with WAL mode."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS usage_logs (
                    id TEXT PRIMARY KEY,
                    timestamp TEXT NOT NULL,
                    mode TEXT NOT NULL,
                    model TEXT,
                    tone TEXT,
                    total_input_tokens INTEGER NOT NULL DEFAULT 0,
                    total_output_tokens INTEGER NOT NULL DEFAULT 0,
                    search_count INTEGER NOT NULL DEFAULT 0,
                    suggestion_count INTEGER NOT NULL DEFAULT 0,
                    elapsed_seconds REAL NOT NULL DEFAULT 0.0,
                    estimated_cost_usd REAL NOT NULL DEFAULT 0.0,
                    success INTEGER NOT NULL DEFAULT 1,
                    error_message TEXT
                )
            """)

    def save_log(self, log: UsageLog) -> None:
        """Persist a usage log entry."""
        row = log.model_dump()
        row["timestamp"] = log.timestamp.isoformat()
        row["success"] = 1 if log.success else 0
        placeholders = ", ".join("?" for _ in _COLUMNS)
        with self._connect() as conn:
            conn.execute(
                f"INSERT OR REPLACE INTO usage_logs ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
                tuple(row[c] for c in _COLUMNS),
            )

    def get_logs(self, mode: str | None = None, limit: int = 50) -> list[UsageLog]:
        """Most recent logs first, optionally filtered by mode."""
        query = f"SELECT {', '.join(_COLUMNS)} FROM usage_logs"
        params: tuple = ()
        if mode is not None:
            query += " WHERE mode = ?"
            params = (mode,)
        query += " ORDER BY timestamp DESC LIMIT ?"
        with self._connect() as conn:
            rows = conn.execute(query, (*params, limit)).fetchall()
        return [self._row_to_log(row) for row in rows]

    def prompt_count(self) -> int:
        """Number of successful AI requests ever made."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT COUNT(*) FROM usage_logs WHERE success = 1"
            ).fetchone()
        return row[0]

    def get_monthly_stats(self) -> dict:
        """Aggregated stats for the current month."""
        now = datetime.now()
        month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        with self._connect() as conn:
            row = conn.execute(
                """SELECT
                       COUNT(*),
                       SUM(total_input_tokens),
                       SUM(total_output_tokens),
                       SUM(search_count),
                       SUM(suggestion_count),
                       SUM(estimated_cost_usd),
                       SUM(CASE WHEN success = 1 THEN 1 ELSE 0 END)
                   FROM usage_logs
                   WHERE timestamp >= ?""",
                (month_start.isoformat(),),
            ).fetchone()
        return {
            "total_runs": row[0] or 0,
            "total_input_tokens": row[1] or 0,
            "total_output_tokens": row[2] or 0,
            "total_searches": row[3] or 0,
            "total_suggestions": row[4] or 0,
            "total_cost_usd": row[5] or 0.0,
            "success_rate": (row[6] / row[0] * 100) if row[0] else 0.0,
            "month": now.strftime("%Y-%m"),
        }

    @staticmethod
    def _row_to_log(row: tuple) -> UsageLog:
        data = dict(zip(_COLUMNS, row))
        data["timestamp"] = datetime.fromisoformat(data["timestamp"])
        data["success"] = bool(data["success"])
        return UsageLog(**data)
