"""
Configuration settings with environment variable loading.

Storage location and logging level come from environment variables,
optionally seeded from a .env file.
"""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..storage.backends import (
    DEFAULT_STORAGE_KEY,
    InMemoryBackend,
    JsonFileBackend,
    SnapshotBackend,
    SQLiteBackend,
)

logger = logging.getLogger(__name__)

BACKENDS = ("json", "sqlite", "memory")

DEFAULT_PATHS = {
    "json": "data/neural-pulse.json",
    "sqlite": "data/neural-pulse.db",
    "memory": "",
}


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


@dataclass(frozen=True)
class StorageConfig:
    """Persistent storage configuration."""
    backend: str = "json"
    path: Path = field(default_factory=lambda: Path(DEFAULT_PATHS["json"]))
    key: str = DEFAULT_STORAGE_KEY

    def __post_init__(self):
        if self.backend not in BACKENDS:
            raise ConfigurationError(
                f"STORAGE_BACKEND must be one of {', '.join(BACKENDS)}, got '{self.backend}'"
            )
        if not self.key:
            raise ConfigurationError("STORAGE_KEY must not be empty")
        object.__setattr__(self, 'path', Path(self.path))


@dataclass(frozen=True)
class Settings:
    """
    Application settings container.

    All configuration is loaded from environment variables.
    """
    storage: StorageConfig
    log_level: str = "INFO"

    def __repr__(self) -> str:
        return (
            f"Settings(\n"
            f"  storage={self.storage},\n"
            f"  log_level={self.log_level}\n"
            f")"
        )


def create_backend(storage: StorageConfig) -> SnapshotBackend:
    """Build the persistence backend described by storage."""
    if storage.backend == "sqlite":
        return SQLiteBackend(storage.path, key=storage.key)
    if storage.backend == "memory":
        return InMemoryBackend(key=storage.key)
    return JsonFileBackend(storage.path, key=storage.key)


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """
    Load settings from environment variables.

    Optionally loads from a .env file first.

    Args:
        env_file: Optional path to .env file

    Returns:
        Configured Settings instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    # Load .env file if provided
    if env_file and env_file.exists():
        _load_env_file(env_file)
    elif Path(".env").exists():
        _load_env_file(Path(".env"))

    try:
        backend = os.getenv("STORAGE_BACKEND", "json").strip().lower()

        storage = StorageConfig(
            backend=backend,
            path=Path(os.getenv("STORAGE_PATH") or DEFAULT_PATHS.get(backend, "")),
            key=os.getenv("STORAGE_KEY", DEFAULT_STORAGE_KEY),
        )

        log_level = os.getenv("LOG_LEVEL", "INFO").upper()

        settings = Settings(storage=storage, log_level=log_level)

        logger.info("Configuration loaded successfully")
        logger.debug(f"Settings: {settings}")

        return settings

    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Failed to load configuration: {e}") from e


def _load_env_file(path: Path) -> None:
    """
    Load environment variables from a file.

    Simple .env parser that handles:
    - KEY=value
    - KEY="quoted value"
    - # comments
    - Empty lines
    """
    logger.debug(f"Loading environment from {path}")

    with open(path) as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()

            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                logger.warning(f"Invalid line {line_num} in {path}: no '=' found")
                continue

            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip()

            if value[:1] == value[-1:] and value[:1] in ('"', "'") and len(value) >= 2:
                value = value[1:-1]

            # Existing environment wins
            if key not in os.environ:
                os.environ[key] = value
