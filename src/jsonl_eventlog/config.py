from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import AnyUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigParseError

DEFAULT_LOG_DIRECTORY = "logs/eventlog"
DEFAULT_LOG_FILENAME = "log.jsonl"
# 100 MiB; 0 disables rotation
DEFAULT_MAX_FILE_SIZE = 104_857_600
# 0 keeps every archive
DEFAULT_MAX_FILES = 0


def parse_int(raw: Any) -> int:
    """Strict base-10 parse of a non-negative integer setting.

    The whole string must be an integer: unlike a prefix parser, ``"10abc"`` is
    rejected rather than read as 10.
    """
    if isinstance(raw, bool):
        raise ConfigParseError(f"expected an integer, got {raw!r}")
    if isinstance(raw, int):
        value = raw
    else:
        try:
            value = int(str(raw).strip(), 10)
        except ValueError as exc:
            raise ConfigParseError(f"not an integer: {raw!r}") from exc
    if value < 0:
        raise ConfigParseError(f"negative value not allowed: {value}")
    return value


def parse_non_negative_int(raw: Any, default: int) -> int:
    """Lenient variant: missing, blank or malformed values give ``default``."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return default
    try:
        return parse_int(raw)
    except ConfigParseError:
        return default


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Event log
    EVENTLOG_DIR: Optional[str] = None
    EVENTLOG_FILENAME: str = DEFAULT_LOG_FILENAME
    EVENTLOG_MAX_FILE_SIZE: int = DEFAULT_MAX_FILE_SIZE
    EVENTLOG_MAX_FILES: int = DEFAULT_MAX_FILES
    EVENTLOG_SCOPE: Optional[str] = None

    # Diagnostics
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None
    DIAGNOSTIC_WEBHOOK_URL: Optional[AnyUrl] = None

    @field_validator("EVENTLOG_MAX_FILE_SIZE", mode="before")
    @classmethod
    def lenient_max_file_size(cls, v: Any) -> int:
        return parse_non_negative_int(v, DEFAULT_MAX_FILE_SIZE)

    @field_validator("EVENTLOG_MAX_FILES", mode="before")
    @classmethod
    def lenient_max_files(cls, v: Any) -> int:
        return parse_non_negative_int(v, DEFAULT_MAX_FILES)

    @field_validator("EVENTLOG_FILENAME", mode="before")
    @classmethod
    def default_filename(cls, v: Any) -> str:
        if v is None or not str(v).strip():
            return DEFAULT_LOG_FILENAME
        return str(v).strip()

    @field_validator("EVENTLOG_DIR", "EVENTLOG_SCOPE", "LOG_FILE", "DIAGNOSTIC_WEBHOOK_URL", mode="before")
    @classmethod
    def blank_is_unset(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


settings = Settings()


def resolve_log_dir(project_root: str | Path, config: Settings | None = None) -> Path:
    """Absolute overrides are used as-is; relative ones hang off the project root."""
    cfg = config or settings
    root = Path(project_root)
    if not cfg.EVENTLOG_DIR:
        return (root / DEFAULT_LOG_DIRECTORY).resolve()
    override = Path(cfg.EVENTLOG_DIR).expanduser()
    if override.is_absolute():
        return override
    return (root / override).resolve()


def resolve_filename(config: Settings | None = None) -> str:
    cfg = config or settings
    return cfg.EVENTLOG_FILENAME or DEFAULT_LOG_FILENAME


def reload_from_env(env_path: str | None = None) -> Settings:
    """Re-read environment and .env, e.g. after the host changed them."""
    global settings
    settings = Settings(_env_file=env_path) if env_path else Settings()  # type: ignore
    return settings
