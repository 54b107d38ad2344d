from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Iterator, Optional, Tuple

RECORD_PREFIX = "SI-"
ID_COUNTER_KEY = "__id_counter__"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
  key TEXT PRIMARY KEY,
  value BLOB NOT NULL
)
"""


class BackendError(RuntimeError):
    """The key-value backend could not complete a call."""


def key_for(record_id: int) -> str:
    return f"{RECORD_PREFIX}{int(record_id)}"


def is_record_key(key: str) -> bool:
    return str(key).startswith(RECORD_PREFIX)


def _prefix_upper_bound(prefix: str) -> str:
    # "SI-" -> "SI." : every key with the prefix sorts in [prefix, bound)
    return prefix[:-1] + chr(ord(prefix[-1]) + 1)


class RecordDB:
    """
    Small persistent key-value store on top of SQLite.

    One connection per call, closed before returning. Every method either
    completes or raises BackendError.
    """

    def __init__(self, path: str | Path, *, timeout_sec: float = 30.0) -> None:
        self.path = Path(path)
        self.timeout_sec = max(1.0, min(60.0, float(timeout_sec)))
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        if self.path.parent and not self.path.parent.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
        # autocommit mode; transactions are opened explicitly where needed
        con = sqlite3.connect(str(self.path), timeout=self.timeout_sec, isolation_level=None)
        con.execute(f"PRAGMA busy_timeout={int(self.timeout_sec * 1000)};")
        return con

    def _init_schema(self) -> None:
        try:
            con = self._connect()
            try:
                con.execute(_SCHEMA)
            finally:
                con.close()
        except (sqlite3.Error, OSError) as e:
            raise BackendError(f"cannot open database {self.path}: {e}") from e

    def get(self, key: str) -> Optional[bytes]:
        try:
            con = self._connect()
            try:
                row = con.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
            finally:
                con.close()
        except (sqlite3.Error, OSError) as e:
            raise BackendError(f"get {key!r} failed: {e}") from e
        return bytes(row[0]) if row else None

    def insert(self, key: str, value: bytes) -> None:
        try:
            con = self._connect()
            try:
                con.execute(
                    "INSERT INTO kv(key, value) VALUES(?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                    (key, sqlite3.Binary(value)),
                )
            finally:
                con.close()
        except (sqlite3.Error, OSError) as e:
            raise BackendError(f"insert {key!r} failed: {e}") from e

    def remove(self, key: str) -> bool:
        """Delete `key`; True if a value existed."""
        try:
            con = self._connect()
            try:
                cur = con.execute("DELETE FROM kv WHERE key=?", (key,))
                removed = cur.rowcount > 0
            finally:
                con.close()
        except (sqlite3.Error, OSError) as e:
            raise BackendError(f"remove {key!r} failed: {e}") from e
        return removed

    def scan_prefix(self, prefix: str) -> Iterator[Tuple[str, bytes]]:
        """(key, value) pairs whose key starts with `prefix`, in key order."""
        try:
            con = self._connect()
            try:
                rows = con.execute(
                    "SELECT key, value FROM kv WHERE key >= ? AND key < ? ORDER BY key",
                    (prefix, _prefix_upper_bound(prefix)),
                ).fetchall()
            finally:
                con.close()
        except (sqlite3.Error, OSError) as e:
            raise BackendError(f"scan {prefix!r} failed: {e}") from e
        for key, value in rows:
            yield str(key), bytes(value)

    def generate_id(self) -> int:
        """
        Next value of the store-wide counter, starting at 0.
        BEGIN IMMEDIATE takes the write lock up front, so concurrent callers
        (threads or processes) are serialized.
        """
        try:
            con = self._connect()
            try:
                con.execute("BEGIN IMMEDIATE")
                try:
                    row = con.execute("SELECT value FROM kv WHERE key=?", (ID_COUNTER_KEY,)).fetchone()
                    new_id = int(bytes(row[0]).decode("ascii")) + 1 if row else 0
                    con.execute(
                        "INSERT INTO kv(key, value) VALUES(?, ?) "
                        "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                        (ID_COUNTER_KEY, sqlite3.Binary(str(new_id).encode("ascii"))),
                    )
                    con.execute("COMMIT")
                except BaseException:
                    con.execute("ROLLBACK")
                    raise
            finally:
                con.close()
        except (sqlite3.Error, OSError) as e:
            raise BackendError(f"id allocation failed: {e}") from e
        return new_id
