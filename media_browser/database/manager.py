# media_browser/database/manager.py
import sqlite3
import threading
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .init import init_db_if_needed
from .schema import MAIN_SCHEMA, FILE_COLUMNS

_FILTER_COLUMNS = frozenset(("id",) + FILE_COLUMNS)


class DatabaseManager:
    """Manages the SQLite connection and the ``files`` collection.

    The connection may be used from worker threads (the library calls in via
    ``asyncio.to_thread``); a lock serialises access to it.
    """

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        if str(db_path) != ":memory:":
            init_db_if_needed(self.db_path)
        self.conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA synchronous=NORMAL;")
        self.conn.executescript(MAIN_SCHEMA)
        self._lock = threading.Lock()

    def close(self) -> None:
        try:
            self.conn.close()
        except sqlite3.Error:
            pass

    def add_file(self, data: Mapping[str, Any]) -> int:
        """Insert one row into ``files`` and return its id."""
        columns = [c for c in FILE_COLUMNS if c in data]
        placeholders = ", ".join("?" for _ in columns)
        values = [self._to_db(c, data[c]) for c in columns]
        with self._lock, self.conn:
            cursor = self.conn.execute(
                f"INSERT INTO files ({', '.join(columns)}) VALUES ({placeholders})",
                values,
            )
            return cursor.lastrowid

    def get_file(self, file_id: int) -> Optional[Dict[str, Any]]:
        with self._lock:
            row = self.conn.execute("SELECT * FROM files WHERE id=?", (file_id,)).fetchone()
        return dict(row) if row else None

    def find_by_fullpath(self, fullpath: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            row = self.conn.execute("SELECT * FROM files WHERE fullpath=?", (fullpath,)).fetchone()
        return dict(row) if row else None

    def modify(self, where: Mapping[str, Any], changes: Mapping[str, Any]) -> int:
        """Partially update every row matching ``where``; returns rows changed.

        Both mappings are keyed by column name and matched exactly.
        """
        if not where or not changes:
            raise ValueError("modify() needs a filter and at least one change")
        unknown = (set(where) - _FILTER_COLUMNS) | (set(changes) - set(FILE_COLUMNS))
        if unknown:
            raise ValueError(f"Unknown column(s): {', '.join(sorted(unknown))}")

        assignments = ", ".join(f"{c}=?" for c in changes)
        conditions = " AND ".join(f"{c}=?" for c in where)
        params = [self._to_db(c, v) for c, v in changes.items()]
        params += [self._to_db(c, v) for c, v in where.items()]
        with self._lock, self.conn:
            cursor = self.conn.execute(
                f"UPDATE files SET {assignments} WHERE {conditions}", params
            )
            return cursor.rowcount

    def list_files(self, favorites_only: bool = False) -> List[Dict[str, Any]]:
        """Return all rows, newest first."""
        query = "SELECT * FROM files"
        if favorites_only:
            query += " WHERE favorited=1"
        query += " ORDER BY ctime DESC, id DESC"
        with self._lock:
            rows = self.conn.execute(query).fetchall()
        return [dict(r) for r in rows]

    @staticmethod
    def _to_db(column: str, value: Any) -> Any:
        if column == "favorited" and value is not None:
            return int(bool(value))
        return value
