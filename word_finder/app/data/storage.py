"""Key-value storage backends for persisted client state."""

from __future__ import annotations

import os
import queue
import sqlite3
import threading
from contextlib import contextmanager
from typing import Dict, Generator, Optional, Protocol

from word_finder.utils.observability import get_logger


def _ensure_parent_directory(path: str) -> None:
    directory = os.path.dirname(os.path.abspath(path))
    if directory and not os.path.exists(directory):
        os.makedirs(directory, exist_ok=True)


class KeyValueStorage(Protocol):
    """Minimal string key-value store, shaped like browser local storage."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...


class InMemoryStorage:
    """Process-local storage used by tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._values.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._values[key] = value


class SQLiteKeyValueStorage:
    """Key-value storage kept in a single SQLite table."""

    def __init__(
        self,
        db_path: str,
        *,
        pool_size: int = 2,
        pool_timeout: float = 5.0,
    ) -> None:
        self.db_path = db_path
        self._pool_size = max(1, int(pool_size))
        self._pool_timeout = max(0.0, float(pool_timeout))
        self._pool: queue.Queue = queue.Queue(maxsize=self._pool_size)
        self._pool_semaphore = threading.BoundedSemaphore(self._pool_size)
        self._logger = get_logger(__name__).bind(
            component="sqlite_storage",
            db_path=db_path,
        )
        self._logger.info(
            "SQLite storage initialised",
            context={"pool_size": self._pool_size, "pool_timeout": self._pool_timeout},
        )

    def _create_connection(self) -> sqlite3.Connection:
        _ensure_parent_directory(self.db_path)
        return sqlite3.connect(self.db_path, check_same_thread=False)

    def _acquire_connection(self) -> sqlite3.Connection:
        if not self._pool_semaphore.acquire(timeout=self._pool_timeout or None):
            self._logger.error(
                "Storage connection pool exhausted",
                context={"pool_size": self._pool_size, "timeout": self._pool_timeout},
            )
            raise TimeoutError("Storage connection pool exhausted")

        try:
            return self._pool.get_nowait()
        except queue.Empty:
            return self._create_connection()

    def _release_connection(self, connection: sqlite3.Connection) -> None:
        try:
            self._pool.put_nowait(connection)
        except queue.Full:
            connection.close()
        finally:
            self._pool_semaphore.release()

    @contextmanager
    def _connect(self) -> Generator[sqlite3.Connection, None, None]:
        connection = self._acquire_connection()
        try:
            yield connection
            if connection.in_transaction:
                connection.commit()
        except Exception as exc:
            if connection.in_transaction:
                connection.rollback()
            self._logger.error("SQLite operation failed", context={"error": str(exc)})
            raise
        finally:
            self._release_connection(connection)

    def ensure_database(self) -> int:
        """Create the storage table if needed and return the number of keys."""

        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS key_value_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
            (count,) = conn.execute("SELECT COUNT(*) FROM key_value_store").fetchone()

        self._logger.info("Storage schema verified", context={"key_count": int(count)})
        return int(count)

    def get_item(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM key_value_store WHERE key = ?",
                (key,),
            ).fetchone()
        return None if row is None else str(row[0])

    def set_item(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO key_value_store (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, value),
            )

    def close(self) -> None:
        while True:
            try:
                connection = self._pool.get_nowait()
            except queue.Empty:
                return
            connection.close()


__all__ = [
    "KeyValueStorage",
    "InMemoryStorage",
    "SQLiteKeyValueStorage",
]
