from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List

import pytest

from jsonl_eventlog.config import Settings
from jsonl_eventlog.fs import LocalFilesystem


class RecordingSink:
    def __init__(self) -> None:
        self.reports: List[Dict[str, Any]] = []

    def report(self, *, service: str, level: str, message: str, extra: Dict[str, Any]) -> None:
        self.reports.append({"service": service, "level": level, "message": message, "extra": extra})

    @property
    def messages(self) -> List[str]:
        return [r["message"] for r in self.reports]


class FlakyFilesystem(LocalFilesystem):
    """LocalFilesystem that fails the operations named in ``fail``."""

    def __init__(self, fail: set[str] | None = None, undeletable: set[str] | None = None) -> None:
        self.fail = set(fail or ())
        self.undeletable = set(undeletable or ())

    def size(self, path: Path) -> int:
        if "size" in self.fail:
            raise PermissionError(13, "stat denied", str(path))
        return super().size(path)

    def append_text(self, path: Path, text: str) -> None:
        if "append" in self.fail:
            raise OSError(28, "No space left on device", str(path))
        super().append_text(path, text)

    def rename(self, src: Path, dst: Path) -> None:
        if "rename" in self.fail:
            raise PermissionError(13, "rename denied", str(src))
        super().rename(src, dst)

    def listdir(self, path: Path) -> List[str]:
        if "listdir" in self.fail:
            raise PermissionError(13, "listdir denied", str(path))
        return super().listdir(path)

    def remove(self, path: Path) -> None:
        if "remove" in self.fail or path.name in self.undeletable:
            raise PermissionError(13, "unlink denied", str(path))
        super().remove(path)

    def makedirs(self, path: Path) -> None:
        if "makedirs" in self.fail:
            raise PermissionError(13, "mkdir denied", str(path))
        super().makedirs(path)


class TickingClock:
    """Deterministic clock that advances one second per call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 10, 19, 2, 42, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


def read_entries(directory: Path) -> List[Dict[str, Any]]:
    entries: List[Dict[str, Any]] = []
    for path in sorted(directory.iterdir()):
        for line in path.read_text(encoding="utf-8").splitlines():
            if line.strip():
                entries.append(json.loads(line))
    return entries


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def make_settings(tmp_path: Path):
    def _make(**overrides: Any) -> Settings:
        values: Dict[str, Any] = {"EVENTLOG_DIR": str(tmp_path / "logs")}
        values.update(overrides)
        return Settings(_env_file=None, **values)  # type: ignore[call-arg]

    return _make
