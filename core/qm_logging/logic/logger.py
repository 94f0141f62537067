"""
core/qm_logging/logic/logger.py
===============================

Thread-safe singleton feature logger with SQLite backend and auto-fill of the
username from the active session when it is not passed explicitly.

Persistence is controlled by ``General.log_to_db``; when disabled, entries are
only kept in memory (``Logger.entries``), capped at ``MEMORY_LIMIT`` newest.
"""

from __future__ import annotations

import os
import threading
from collections import deque
from contextlib import closing
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from core.config.config_service import config_service
from core.common.db_interface import DatabaseAccess, create_sqlite_connection
from core.qm_logging.models.log_entry import LogEntry

MEMORY_LIMIT = 10_000


# --------------------------------------------------------------------------- #
#  Singleton class                                                            #
# --------------------------------------------------------------------------- #
class Logger(DatabaseAccess):
    """Thread-safe singleton logger with auto-username."""

    _instance: "Logger | None" = None
    _instance_lock = threading.Lock()

    def __new__(cls) -> "Logger":  # noqa: D401
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False  # type: ignore[attr-defined]
        return cls._instance  # type: ignore[return-value]

    def __init__(self) -> None:
        if getattr(self, "_initialized", False):
            return
        self._initialized = True

        self._lock = threading.Lock()
        self._db_path: Path = config_service.database.logging
        self._persist: bool = config_service.general.log_to_db
        self._db_ready = False
        self.entries: deque[LogEntry] = deque(maxlen=MEMORY_LIMIT)

    @property
    def db_path(self) -> Path:
        return self._db_path

    @property
    def persist(self) -> bool:
        return self._persist

    @property
    def memory_limit(self) -> int:
        return self.entries.maxlen or MEMORY_LIMIT

    def connect(self):
        return create_sqlite_connection(self._db_path)

    def configure(
        self,
        *,
        db_path: Optional[Path] = None,
        persist: Optional[bool] = None,
        memory_limit: Optional[int] = None,
    ) -> None:
        """Redirect the backend (used by the launcher and tests)."""
        with self._lock:
            if db_path is not None:
                self._db_path = Path(db_path)
                self._db_ready = False
            if persist is not None:
                self._persist = persist
            if memory_limit is not None:
                self.entries = deque(self.entries, maxlen=max(memory_limit, 1))

    # ------------------------------------------------------------------ #
    #  Public API: log                                                   #
    # ------------------------------------------------------------------ #
    def log(
        self,
        feature: str,
        event: str,
        *,
        user_id: Optional[int] = None,
        username: Optional[str] = None,
        level: str = "INFO",
        reference_id: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        """
        Record a log entry.

        Auto-username: if *username* is omitted, the logger uses
        ``AppContext.get_current_user().current_user_login``. Falls back to
        "unknown".
        """
        if username is None:
            # lazy import, app_context imports feature code indirectly
            from core.common.app_context import AppContext  # noqa: WPS433
            session = AppContext.get_current_user()
            if session is not None:
                username = session.current_user_login

        entry = LogEntry(
            id=None,
            timestamp=datetime.now(timezone.utc),
            user_id=user_id,
            username=username or "unknown",
            feature=feature,
            event=event,
            reference_id=reference_id,
            message=message,
            log_level=level,
        )

        with self._lock:
            self.entries.append(entry)
            if self._persist:
                self._ensure_db()
                self._insert_log(entry)

    # ------------------------------------------------------------------ #
    #  Fetch / Query / Clear                                             #
    # ------------------------------------------------------------------ #
    def fetch_logs(self, limit: int = 100) -> List[LogEntry]:
        return self.query_logs(limit=limit)

    def query_logs(
        self,
        *,
        username: Optional[str] = None,
        feature: Optional[str] = None,
        event: Optional[str] = None,
        reference_id: Optional[str] = None,
        level: Optional[str] = None,
        limit: int = 1_000,
    ) -> List[LogEntry]:
        if not self._persist:
            result = [
                e for e in reversed(self.entries)
                if (username is None or e.username == username)
                and (feature is None or e.feature == feature)
                and (event is None or e.event == event)
                and (reference_id is None or e.reference_id == reference_id)
                and (level is None or e.log_level == level)
            ]
            return result[:limit]

        self._ensure_db()
        query = "SELECT * FROM logs WHERE 1=1"
        params: list[object] = []

        if username is not None:
            query += " AND username = ?"
            params.append(username)
        if feature is not None:
            query += " AND feature = ?"
            params.append(feature)
        if event is not None:
            query += " AND event = ?"
            params.append(event)
        if reference_id is not None:
            query += " AND reference_id = ?"
            params.append(reference_id)
        if level is not None:
            query += " AND log_level = ?"
            params.append(level)

        query += " ORDER BY timestamp DESC, id DESC LIMIT ?"
        params.append(limit)

        with closing(self.connect()) as conn:
            rows = conn.execute(query, params).fetchall()
        return [LogEntry.from_dict(dict(zip(row.keys(), row))) for row in rows]

    def clear_logs(self) -> None:
        with self._lock:
            self.entries.clear()
            if self._persist:
                self._ensure_db()
                with closing(self.connect()) as conn:
                    conn.execute("DELETE FROM logs")
                    conn.commit()

    # ------------------------------------------------------------------ #
    #  Internal helpers                                                  #
    # ------------------------------------------------------------------ #
    def _ensure_db(self) -> None:
        if self._db_ready:
            return
        os.makedirs(self.db_path.parent, exist_ok=True)
        with closing(self.connect()) as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS logs (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp TEXT NOT NULL,
                    user_id INTEGER,
                    username TEXT,
                    feature TEXT NOT NULL,
                    event TEXT NOT NULL,
                    reference_id TEXT,
                    message TEXT,
                    log_level TEXT NOT NULL DEFAULT 'INFO'
                )
                """
            )
            conn.commit()
        self._db_ready = True

    def _insert_log(self, entry: LogEntry) -> None:
        with closing(self.connect()) as conn:
            conn.execute(
                """
                INSERT INTO logs
                    (timestamp, user_id, username, feature, event,
                     reference_id, message, log_level)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.timestamp.isoformat(),
                    entry.user_id,
                    entry.username,
                    entry.feature,
                    entry.event,
                    entry.reference_id,
                    entry.message,
                    entry.log_level,
                ),
            )
            conn.commit()


# --------------------------------------------------------------------------- #
#  Global instance                                                            #
# --------------------------------------------------------------------------- #
logger: Logger = Logger()
