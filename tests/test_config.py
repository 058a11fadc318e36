from __future__ import annotations

from pathlib import Path

import pytest

from jsonl_eventlog import config as config_mod
from jsonl_eventlog.config import (
    DEFAULT_MAX_FILE_SIZE,
    Settings,
    parse_int,
    parse_non_negative_int,
    resolve_filename,
    resolve_log_dir,
)
from jsonl_eventlog.errors import ConfigParseError

ENV_KEYS = ("EVENTLOG_DIR", "EVENTLOG_FILENAME", "EVENTLOG_MAX_FILE_SIZE", "EVENTLOG_MAX_FILES", "EVENTLOG_SCOPE")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def _settings() -> Settings:
    return Settings(_env_file=None)  # type: ignore[call-arg]


def test_defaults():
    s = _settings()
    assert s.EVENTLOG_DIR is None
    assert s.EVENTLOG_FILENAME == "log.jsonl"
    assert s.EVENTLOG_MAX_FILE_SIZE == DEFAULT_MAX_FILE_SIZE
    assert s.EVENTLOG_MAX_FILES == 0


def test_numeric_values_from_environment(monkeypatch):
    monkeypatch.setenv("EVENTLOG_MAX_FILE_SIZE", "2048")
    monkeypatch.setenv("EVENTLOG_MAX_FILES", " 5 ")
    s = _settings()
    assert s.EVENTLOG_MAX_FILE_SIZE == 2048
    assert s.EVENTLOG_MAX_FILES == 5


def test_zero_is_honoured(monkeypatch):
    monkeypatch.setenv("EVENTLOG_MAX_FILE_SIZE", "0")
    assert _settings().EVENTLOG_MAX_FILE_SIZE == 0


@pytest.mark.parametrize("raw", ["not-a-number", "", "   ", "1.5", "-10", "10abc"])
def test_malformed_numbers_fall_back_silently(monkeypatch, raw):
    monkeypatch.setenv("EVENTLOG_MAX_FILE_SIZE", raw)
    monkeypatch.setenv("EVENTLOG_MAX_FILES", raw)
    s = _settings()
    assert s.EVENTLOG_MAX_FILE_SIZE == DEFAULT_MAX_FILE_SIZE
    assert s.EVENTLOG_MAX_FILES == 0


def test_strict_parser_raises_config_parse_error():
    assert parse_int("42") == 42
    with pytest.raises(ConfigParseError):
        parse_int("forty-two")
    with pytest.raises(ConfigParseError):
        parse_int(-1)
    with pytest.raises(ConfigParseError):
        parse_int(True)
    assert parse_non_negative_int(None, 7) == 7
    assert parse_non_negative_int("x", 7) == 7


def test_blank_filename_uses_default(monkeypatch):
    monkeypatch.setenv("EVENTLOG_FILENAME", "  ")
    assert resolve_filename(_settings()) == "log.jsonl"


def test_absolute_dir_is_used_as_is(monkeypatch, tmp_path: Path):
    target = tmp_path / "elsewhere"
    monkeypatch.setenv("EVENTLOG_DIR", str(target))
    assert resolve_log_dir("/some/project", _settings()) == target


def test_relative_dir_resolves_against_project_root(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("EVENTLOG_DIR", "custom_logs")
    assert resolve_log_dir(tmp_path, _settings()) == (tmp_path / "custom_logs").resolve()


def test_missing_dir_uses_default_location(tmp_path: Path):
    assert resolve_log_dir(tmp_path, _settings()) == (tmp_path / "logs" / "eventlog").resolve()


def test_reload_from_env_picks_up_dotenv(tmp_path: Path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("EVENTLOG_MAX_FILES=9\nEVENTLOG_SCOPE=session.*\n", encoding="utf-8")
    monkeypatch.setattr(config_mod, "settings", config_mod.settings)
    reloaded = config_mod.reload_from_env(str(env_file))
    assert reloaded.EVENTLOG_MAX_FILES == 9
    assert reloaded.EVENTLOG_SCOPE == "session.*"
    assert config_mod.settings is reloaded
