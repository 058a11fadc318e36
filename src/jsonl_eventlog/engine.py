# jsonl-eventlog/src/jsonl_eventlog/engine.py
"""Rotation-safe append engine.

Every write runs check-size, rotate, prune and append as one critical section
guarded by a lock owned by the engine instance. Two callers can therefore never
both see an oversized file and both try to rename it, and each line lands whole
in exactly one file. The lock is in-process only; a second process writing to
the same directory is not coordinated.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Tuple

from .errors import AppendError, EventLogError, RotationError
from .fs import LocalFilesystem
from .logging_cfg import get_logger
from .pruning import archive_name, prune_archives
from .timestamps import archive_stamp, utcnow

log = get_logger(__name__)

ErrorReporter = Callable[[str, EventLogError], None]


def _log_reporter(message: str, error: EventLogError) -> None:
    log.error(f"{message} {error}")


@dataclass(frozen=True)
class AppendResult:
    written: bool
    archive: Optional[Path] = None
    pruned: Tuple[Path, ...] = ()
    errors: Tuple[EventLogError, ...] = ()

    @property
    def rotated(self) -> bool:
        return self.archive is not None


class RotatingAppendEngine:
    def __init__(
        self,
        log_dir: Path,
        base_filename: str,
        max_file_size: int,
        max_files: int,
        fs: Optional[LocalFilesystem] = None,
        report: Optional[ErrorReporter] = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.base_filename = base_filename
        self.active_path = self.log_dir / base_filename
        self.max_file_size = max_file_size
        self.max_files = max_files
        self.fs = fs or LocalFilesystem()
        self._report = report or _log_reporter
        self._clock = clock
        self._lock = threading.Lock()

    def append(self, line: str) -> AppendResult:
        """Append one serialized line, rotating first if the active file is full.

        Filesystem failures never raise: rotation and append errors are handed
        to the reporter and returned in the result.
        """
        errors: list[EventLogError] = []
        archive: Optional[Path] = None
        pruned: Tuple[Path, ...] = ()

        with self._lock:
            if self._needs_rotation():
                try:
                    archive = self._rotate()
                except RotationError as e:
                    # keep writing to the active path; size enforcement is best-effort
                    errors.append(e)
                    self._report("Failed to rotate log file.", e)
                else:
                    if self.max_files > 0:
                        pruned = tuple(prune_archives(self.fs, self.log_dir, self.base_filename, self.max_files))

            # ValueError covers text the adapter cannot encode
            try:
                self.fs.append_text(self.active_path, line)
            except (OSError, ValueError) as exc:
                err = AppendError(f"append to {self.active_path} failed: {exc}")
                err.__cause__ = exc
                errors.append(err)
                self._report("Failed to write to log file.", err)
                return AppendResult(written=False, archive=archive, pruned=pruned, errors=tuple(errors))

        return AppendResult(written=True, archive=archive, pruned=pruned, errors=tuple(errors))

    def _needs_rotation(self) -> bool:
        if self.max_file_size <= 0:
            return False
        try:
            size = self.fs.size(self.active_path)
        except FileNotFoundError:
            # first write ever, or the file was just rotated away
            return False
        except OSError as e:
            # an unreadable size never blocks a write
            log.debug(f"stat {self.active_path} failed, skipping rotation: {e}")
            return False
        return size >= self.max_file_size

    def _next_archive_path(self) -> Path:
        # the random suffix separates two rotations within the same second
        short_id = uuid.uuid4().hex[:8]
        return self.log_dir / archive_name(self.base_filename, archive_stamp(self._clock()), short_id)

    def _rotate(self) -> Path:
        target = self._next_archive_path()
        try:
            self.fs.rename(self.active_path, target)
        except OSError as exc:
            raise RotationError(f"rename {self.active_path} -> {target.name} failed: {exc}") from exc
        log.info(f"rotated {self.active_path.name} -> {target.name}")
        return target
