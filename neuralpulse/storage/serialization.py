"""
Snapshot encoding for the persistence slot.

The slot value is JSON text of the form
``{"state": {...}, "version": 0}`` where ``state`` holds the
``currentUser``, ``users``, ``articles`` and ``uploadedImages`` tables.
"""

import json

from .models import Snapshot

SNAPSHOT_VERSION = 0


class StateStoreError(Exception):
    """Base class for state store failures."""
    pass


class PersistenceError(StateStoreError):
    """Raised when a backend cannot read or write its slot."""
    pass


class SnapshotDecodeError(StateStoreError):
    """Raised when slot contents cannot be turned back into a snapshot."""
    pass


class SnapshotEncodeError(StateStoreError):
    """Raised when a snapshot holds values that cannot be serialized."""
    pass


def encode_snapshot(snapshot: Snapshot) -> str:
    """
    Serialize a snapshot to the slot value.

    Raises:
        SnapshotEncodeError: If an entity holds a value JSON cannot represent
    """
    try:
        return json.dumps(
            {"state": snapshot.to_dict(), "version": SNAPSHOT_VERSION},
            ensure_ascii=False,
        )
    except (TypeError, ValueError, AttributeError) as e:
        raise SnapshotEncodeError(f"Snapshot cannot be serialized: {e}") from e


def decode_snapshot(raw: str) -> Snapshot:
    """
    Deserialize a slot value.

    Args:
        raw: JSON text previously produced by encode_snapshot

    Returns:
        The decoded Snapshot

    Raises:
        SnapshotDecodeError: If the text is not a valid snapshot
    """
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise SnapshotDecodeError(f"Slot is not valid JSON: {e}") from e

    if not isinstance(payload, dict) or not isinstance(payload.get("state"), dict):
        raise SnapshotDecodeError("Slot does not contain a state object")

    version = payload.get("version", SNAPSHOT_VERSION)
    if version != SNAPSHOT_VERSION:
        raise SnapshotDecodeError(f"Unsupported snapshot version: {version}")

    try:
        return Snapshot.from_dict(payload["state"])
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise SnapshotDecodeError(f"Malformed snapshot: {e}") from e
