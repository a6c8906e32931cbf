import pytest
from pathlib import Path

from neuralpulse.config.settings import (
    ConfigurationError,
    Settings,
    StorageConfig,
    create_backend,
    load_settings,
)
from neuralpulse.storage.backends import InMemoryBackend, JsonFileBackend, SQLiteBackend


def test_load_settings_success(mock_env):
    """Test loading settings with valid environment variables."""
    settings = load_settings()

    assert isinstance(settings, Settings)
    assert settings.storage.backend == "sqlite"
    assert settings.storage.key == "test-storage"
    assert settings.storage.path.name == "test.db"
    assert settings.log_level == "DEBUG"


def test_load_settings_defaults(monkeypatch, tmp_path):
    """Test defaults when nothing is configured."""
    monkeypatch.chdir(tmp_path)
    for name in ("STORAGE_BACKEND", "STORAGE_PATH", "STORAGE_KEY", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.storage.backend == "json"
    assert settings.storage.path == Path("data/neural-pulse.json")
    assert settings.storage.key == "neural-pulse-storage"
    assert settings.log_level == "INFO"


def test_load_settings_invalid_backend(mock_env, monkeypatch):
    """Test error on an unknown backend name."""
    monkeypatch.setenv("STORAGE_BACKEND", "redis")

    with pytest.raises(ConfigurationError, match="STORAGE_BACKEND must be one of"):
        load_settings()


def test_load_settings_empty_key(mock_env, monkeypatch):
    """Test error on an empty slot key."""
    monkeypatch.setenv("STORAGE_KEY", "")

    with pytest.raises(ConfigurationError, match="STORAGE_KEY must not be empty"):
        load_settings()


def test_env_file_does_not_override_environment(mock_env, monkeypatch, tmp_path):
    """Test .env values fill gaps but never replace existing variables."""
    monkeypatch.delenv("STORAGE_KEY", raising=False)
    env_file = tmp_path / "custom.env"
    env_file.write_text(
        "# storage\n"
        "STORAGE_BACKEND=json\n"
        'STORAGE_KEY="from-file"\n'
        "not a setting\n"
    )

    settings = load_settings(env_file=env_file)

    assert settings.storage.backend == "sqlite"
    assert settings.storage.key == "from-file"


def test_create_backend(tmp_path):
    """Test each backend name builds the matching adapter."""
    json_backend = create_backend(StorageConfig(backend="json", path=tmp_path / "s.json"))
    sqlite_backend = create_backend(StorageConfig(backend="sqlite", path=tmp_path / "s.db", key="k"))
    memory_backend = create_backend(StorageConfig(backend="memory", path=Path("")))

    assert isinstance(json_backend, JsonFileBackend)
    assert isinstance(sqlite_backend, SQLiteBackend)
    assert sqlite_backend.key == "k"
    assert isinstance(memory_backend, InMemoryBackend)


def test_settings_live_inside_package():
    """Test settings ship inside the neuralpulse package, not as a top-level module."""
    import neuralpulse
    import neuralpulse.config.settings as settings_module
    from neuralpulse import main

    package_dir = Path(neuralpulse.__file__).parent

    assert Path(settings_module.__file__).parent == package_dir / "config"
    assert main.load_settings is load_settings
