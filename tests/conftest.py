"""
Pytest configuration and shared fixtures.

Provides in-memory and on-disk backends, a store with predictable ids
and sample entities.
"""

import itertools
import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest

from neuralpulse.storage.backends import InMemoryBackend
from neuralpulse.storage.models import Article, Role, UploadedImage, User
from neuralpulse.storage.state_store import AdminStore


# ============================================================================
# Store Fixtures
# ============================================================================

@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Deterministic id generator: id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def memory_backend() -> InMemoryBackend:
    """Empty in-memory backend."""
    return InMemoryBackend()


@pytest.fixture
def store(memory_backend: InMemoryBackend, id_factory) -> AdminStore:
    """Fresh store seeded with the demo users."""
    return AdminStore(memory_backend, id_factory=id_factory)


@pytest.fixture
def admin_store(store: AdminStore) -> AdminStore:
    """Store with the demo admin logged in."""
    assert store.login("admin", "admin123")
    return store


# ============================================================================
# File Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Temporary directory removed after the test."""
    with tempfile.TemporaryDirectory(prefix="neuralpulse-test-") as d:
        yield Path(d)


@pytest.fixture
def temp_json_path(temp_dir: Path) -> Path:
    return temp_dir / "storage" / "neural-pulse.json"


@pytest.fixture
def temp_db_path(temp_dir: Path) -> Path:
    return temp_dir / "storage" / "neural-pulse.db"


# ============================================================================
# Entity Fixtures
# ============================================================================

@pytest.fixture
def sample_user() -> User:
    """A not-yet-registered author."""
    return User(
        username="grace",
        password="hopper42",
        role=Role.AUTHOR,
        name="Grace Hopper",
        email="grace@neuralpulse.com",
    )


@pytest.fixture
def sample_article() -> Article:
    """A draft article owned by the demo author."""
    return Article(
        title="Multimodal AI Models",
        description="How models learn across text, images and audio.",
        content="<p>Multimodal models combine several input types.</p>",
        category="Research",
        date="January 20, 2026",
        author="Demo Author",
        author_id="2",
        read_time="8 min read",
        image="https://images.example.com/multimodal.jpg",
        slug="multimodal-ai-models",
        published=False,
    )


@pytest.fixture
def sample_image() -> UploadedImage:
    """An image uploaded by the demo author."""
    return UploadedImage(
        url="data:image/png;base64,iVBORw0KGgo=",
        name="cover.png",
        uploaded_by="2",
        uploaded_at="2026-01-15T14:30:00+00:00",
    )


# ============================================================================
# Environment Fixtures
# ============================================================================

@pytest.fixture
def mock_env(monkeypatch, temp_dir: Path):
    """Storage environment pointing at a temporary sqlite file."""
    monkeypatch.chdir(temp_dir)
    monkeypatch.setenv("STORAGE_BACKEND", "sqlite")
    monkeypatch.setenv("STORAGE_PATH", str(temp_dir / "test.db"))
    monkeypatch.setenv("STORAGE_KEY", "test-storage")
    monkeypatch.setenv("LOG_LEVEL", "debug")
