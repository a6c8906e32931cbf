"""Persistent admin store module."""

from .backends import InMemoryBackend, JsonFileBackend, SnapshotBackend, SQLiteBackend
from .models import Article, Role, Snapshot, UploadedImage, User
from .serialization import (
    PersistenceError,
    SnapshotDecodeError,
    SnapshotEncodeError,
    StateStoreError,
)
from .state_store import AdminStore, OperationResult

__all__ = [
    "AdminStore",
    "OperationResult",
    "SnapshotBackend",
    "InMemoryBackend",
    "JsonFileBackend",
    "SQLiteBackend",
    "Article",
    "Role",
    "Snapshot",
    "UploadedImage",
    "User",
    "StateStoreError",
    "PersistenceError",
    "SnapshotDecodeError",
    "SnapshotEncodeError",
]
