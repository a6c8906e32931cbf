"""
Persistence backends for the admin store.

Each backend owns a single named slot holding the serialized snapshot.
The store only ever talks to the ``load`` / ``save`` / ``clear`` port.
"""

import json
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .models import Snapshot
from .serialization import (
    PersistenceError,
    SnapshotDecodeError,
    decode_snapshot,
    encode_snapshot,
)

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "neural-pulse-storage"


class SnapshotBackend:
    """
    Persistence port used by AdminStore.

    Subclasses implement raw slot access; encoding is shared.
    """

    def __init__(self, key: str = DEFAULT_STORAGE_KEY):
        self.key = key

    def load(self) -> Optional[Snapshot]:
        """
        Read the snapshot from the slot.

        Returns:
            Snapshot if the slot exists, None otherwise

        Raises:
            PersistenceError: If the slot cannot be read
            SnapshotDecodeError: If the slot contents are unreadable
        """
        raw = self._read()
        if raw is None:
            return None
        return decode_snapshot(raw)

    def save(self, snapshot: Snapshot) -> None:
        """
        Write the snapshot to the slot, replacing any previous value.

        Raises:
            PersistenceError: If the slot cannot be written
            SnapshotEncodeError: If the snapshot cannot be serialized
        """
        self.save_encoded(encode_snapshot(snapshot))

    def save_encoded(self, raw: str) -> None:
        """Write an already serialized snapshot to the slot."""
        self._write(raw)

    def clear(self) -> None:
        """Remove the slot."""
        raise NotImplementedError

    def _read(self) -> Optional[str]:
        raise NotImplementedError

    def _write(self, raw: str) -> None:
        raise NotImplementedError


class InMemoryBackend(SnapshotBackend):
    """Keeps the serialized slot in a dictionary. Nothing survives the process."""

    def __init__(self, key: str = DEFAULT_STORAGE_KEY):
        super().__init__(key)
        self.slots: dict[str, str] = {}

    def _read(self) -> Optional[str]:
        return self.slots.get(self.key)

    def _write(self, raw: str) -> None:
        self.slots[self.key] = raw

    def clear(self) -> None:
        self.slots.pop(self.key, None)


class JsonFileBackend(SnapshotBackend):
    """
    JSON file used as a local key/value area.

    The file holds an object mapping slot keys to serialized values, so
    several stores can share one file under different keys.

    Usage:
        backend = JsonFileBackend(Path("data/neural-pulse.json"))
        store = AdminStore(backend)
    """

    def __init__(self, path: Path, key: str = DEFAULT_STORAGE_KEY):
        super().__init__(key)
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _read_area(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                area = json.load(f)
        except OSError as e:
            raise PersistenceError(f"Cannot read {self.path}: {e}") from e
        except ValueError as e:
            raise SnapshotDecodeError(f"{self.path} is not a JSON object: {e}") from e

        if not isinstance(area, dict):
            raise SnapshotDecodeError(f"{self.path} is not a JSON object")
        return area

    def _read_area_for_update(self) -> dict:
        """Read the area before rewriting it; corrupt contents are replaced."""
        try:
            return self._read_area()
        except SnapshotDecodeError as e:
            logger.warning(f"Discarding unreadable contents of {self.path}: {e}")
            return {}

    def _write_area(self, area: dict) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(area, f, ensure_ascii=False)
            tmp_path.replace(self.path)
        except OSError as e:
            raise PersistenceError(f"Cannot write {self.path}: {e}") from e

    def _read(self) -> Optional[str]:
        value = self._read_area().get(self.key)
        if value is not None and not isinstance(value, str):
            raise PersistenceError(f"Slot '{self.key}' in {self.path} is not a string")
        return value

    def _write(self, raw: str) -> None:
        area = self._read_area_for_update()
        area[self.key] = raw
        self._write_area(area)
        logger.debug(f"Wrote slot '{self.key}' to {self.path}")

    def clear(self) -> None:
        try:
            area = self._read_area()
            present = area.pop(self.key, None) is not None
        except SnapshotDecodeError:
            area, present = {}, True
        if present:
            self._write_area(area)
        logger.warning(f"Slot '{self.key}' cleared from {self.path}")


class SQLiteBackend(SnapshotBackend):
    """
    SQLite-backed key/value slot.

    Features:
    - One row per slot key
    - Automatic schema migration via a _metadata table
    - Short-lived connection per call
    """

    SCHEMA_VERSION = 1

    CREATE_TABLE_SQL = """
        CREATE TABLE IF NOT EXISTS kv_store (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
    """

    CREATE_METADATA_TABLE_SQL = """
        CREATE TABLE IF NOT EXISTS _metadata (
            key TEXT PRIMARY KEY,
            value TEXT
        )
    """

    def __init__(self, database_path: Path, key: str = DEFAULT_STORAGE_KEY):
        """
        Initialize the backend.

        Args:
            database_path: Path to SQLite database file
            key: Slot key
        """
        super().__init__(key)
        self.database_path = Path(database_path)

        # Ensure parent directory exists
        self.database_path.parent.mkdir(parents=True, exist_ok=True)

        self._initialize_database()

        logger.info(f"SQLite backend initialized at {self.database_path}")

    def _initialize_database(self) -> None:
        """Create tables and record the schema version."""
        with self._get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute(self.CREATE_METADATA_TABLE_SQL)

            cursor.execute("SELECT value FROM _metadata WHERE key = 'schema_version'")
            row = cursor.fetchone()
            current_version = int(row[0]) if row else 0

            cursor.execute(self.CREATE_TABLE_SQL)

            if current_version < self.SCHEMA_VERSION:
                logger.info(f"Upgrading schema from v{current_version} to v{self.SCHEMA_VERSION}")
                cursor.execute(
                    "INSERT OR REPLACE INTO _metadata (key, value) VALUES (?, ?)",
                    ("schema_version", str(self.SCHEMA_VERSION)),
                )

            conn.commit()

    @contextmanager
    def _get_connection(self) -> Iterator[sqlite3.Connection]:
        """
        Get a database connection.

        Yields:
            SQLite connection

        Raises:
            PersistenceError: On any sqlite3 error inside the block
        """
        try:
            conn = sqlite3.connect(self.database_path, timeout=30.0)
        except sqlite3.Error as e:
            raise PersistenceError(f"Cannot open {self.database_path}: {e}") from e

        try:
            yield conn
        except sqlite3.Error as e:
            raise PersistenceError(f"SQLite error on {self.database_path}: {e}") from e
        finally:
            conn.close()

    def _read(self) -> Optional[str]:
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM kv_store WHERE key = ?", (self.key,))
            row = cursor.fetchone()
            return row[0] if row else None

    def _write(self, raw: str) -> None:
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO kv_store (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                """,
                (self.key, raw),
            )
            conn.commit()

        logger.debug(f"Wrote slot '{self.key}' to {self.database_path}")

    def clear(self) -> None:
        """
        Delete the slot row.

        WARNING: This is destructive. Use only for testing or reset.
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM kv_store WHERE key = ?", (self.key,))
            conn.commit()

        logger.warning(f"Slot '{self.key}' cleared from {self.database_path}")
