"""
Settings defaults, environment loading and validation.
"""

from pathlib import Path

import pytest

from remissio.infrastructure.config import Settings


def test_defaults():
    s = Settings()

    assert s.storage_backend == "sqlite"
    assert s.db_path == "remissio.db"
    assert s.log_level == "WARNING"
    assert s.timeline_days == 7
    assert s.default_language == "de"


def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("REMISSIO_STORAGE_BACKEND", "memory")
    monkeypatch.setenv("REMISSIO_DB_PATH", str(tmp_path / "x.db"))
    monkeypatch.setenv("REMISSIO_LOG_LEVEL", "debug")
    monkeypatch.setenv("REMISSIO_TIMELINE_DAYS", "14")
    monkeypatch.setenv("REMISSIO_LANGUAGE", "en")

    s = Settings.from_env(env_file=tmp_path / "missing.env")

    assert s.storage_backend == "memory"
    assert s.db_file == tmp_path / "x.db"
    assert s.log_level == "DEBUG"
    assert s.timeline_days == 14
    assert s.default_language == "en"


def test_from_env_reads_dotenv_file(monkeypatch, tmp_path):
    monkeypatch.delenv("REMISSIO_TIMELINE_DAYS", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("REMISSIO_TIMELINE_DAYS=30\n")

    assert Settings.from_env(env_file=env_file).timeline_days == 30
    monkeypatch.delenv("REMISSIO_TIMELINE_DAYS", raising=False)


def test_db_file_expands_user():
    assert Settings(db_path="~/remissio.db").db_file == Path("~/remissio.db").expanduser()


@pytest.mark.parametrize("kwargs", [{"storage_backend": "postgres"}, {"timeline_days": 0}])
def test_invalid_settings(kwargs):
    with pytest.raises(ValueError):
        Settings(**kwargs)


@pytest.mark.parametrize("kwargs, message", [
    ({"log_level": "LOUD"}, "log_level"),
    ({"default_language": "xx"}, "default_language"),
])
def test_invalid_level_and_language(kwargs, message):
    with pytest.raises(ValueError, match=message):
        Settings(**kwargs)


def test_from_env_rejects_non_numeric_days(monkeypatch, tmp_path):
    monkeypatch.setenv("REMISSIO_TIMELINE_DAYS", "abc")

    with pytest.raises(ValueError, match="REMISSIO_TIMELINE_DAYS must be a whole number, got 'abc'"):
        Settings.from_env(env_file=tmp_path / "missing.env")
