"""
Tests for the command line entry point.
"""

import logging

from neuralpulse.main import main
from neuralpulse.storage.backends import SQLiteBackend
from neuralpulse.storage.models import Article
from neuralpulse.storage.state_store import AdminStore


def test_status(mock_env, caplog):
    """Test the default command reports table counts."""
    with caplog.at_level(logging.INFO):
        assert main([]) == 0

    assert "Users:               2" in caplog.text
    assert "Session user:        (none)" in caplog.text


def test_list_articles(mock_env, temp_dir, caplog):
    """Test listing articles from the configured store."""
    store = AdminStore(SQLiteBackend(temp_dir / "test.db", key="test-storage"))
    store.add_article(Article(title="Listed Article", slug="listed-article", published=True))

    with caplog.at_level(logging.INFO):
        assert main(["--list", "articles"]) == 0

    assert "listed-article | published" in caplog.text


def test_reset(mock_env, temp_dir):
    """Test --reset restores the demo data in storage."""
    store = AdminStore(SQLiteBackend(temp_dir / "test.db", key="test-storage"))
    store.login("admin", "admin123")
    store.add_article(Article(title="Doomed"))

    assert main(["--reset"]) == 0

    reloaded = AdminStore(SQLiteBackend(temp_dir / "test.db", key="test-storage"))
    assert reloaded.articles == ()
    assert reloaded.current_user is None


def test_invalid_configuration(mock_env, monkeypatch):
    """Test configuration errors exit with status 1."""
    monkeypatch.setenv("STORAGE_BACKEND", "redis")
    assert main([]) == 1
