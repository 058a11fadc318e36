# jsonl-eventlog/src/jsonl_eventlog/logger.py
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Optional

from .config import Settings, resolve_filename, resolve_log_dir, settings
from .diagnostics import SERVICE_NAME, DiagnosticSink, build_sink
from .engine import AppendResult, RotatingAppendEngine
from .errors import EventLogError, InitializationError, SerializationError
from .fs import LocalFilesystem
from .logging_cfg import get_logger
from .serializer import serialize
from .timestamps import utcnow

log = get_logger(__name__)


class EventLogger:
    """Write-side facade: owns one engine and routes every failure to a sink.

    Configuration is read once here; changing the environment afterwards does
    not affect an existing instance. ``init``, ``log`` and ``log_async`` never
    raise.
    """

    def __init__(
        self,
        project_root: str | Path,
        config: Optional[Settings] = None,
        sink: Optional[DiagnosticSink] = None,
        fs: Optional[LocalFilesystem] = None,
    ) -> None:
        cfg = config or settings
        self.sink = sink or build_sink(cfg)
        self.fs = fs or LocalFilesystem()
        self.engine = RotatingAppendEngine(
            log_dir=resolve_log_dir(project_root, cfg),
            base_filename=resolve_filename(cfg),
            max_file_size=cfg.EVENTLOG_MAX_FILE_SIZE,
            max_files=cfg.EVENTLOG_MAX_FILES,
            fs=self.fs,
            report=self._report,
        )

    @property
    def log_dir(self) -> Path:
        return self.engine.log_dir

    @property
    def log_file_path(self) -> Path:
        return self.engine.active_path

    @property
    def max_file_size(self) -> int:
        return self.engine.max_file_size

    @property
    def max_files(self) -> int:
        return self.engine.max_files

    def init(self) -> None:
        """Create the log directory (and parents). Failure is reported, not raised."""
        try:
            self.fs.makedirs(self.log_dir)
        except OSError as exc:
            err = InitializationError(f"cannot create {self.log_dir}: {exc}")
            err.__cause__ = exc
            self._report("Failed to initialize.", err)
            return
        log.debug(f"event log directory ready: {self.log_dir}")

    def log(self, event_type: str, payload: Any) -> Optional[AppendResult]:
        """Record one event. Returns the engine result, or None if it was dropped before writing."""
        try:
            line = serialize(event_type, payload, utcnow())
        except SerializationError as e:
            self._report("Failed to serialize log entry.", e)
            return None
        return self.engine.append(line)

    async def log_async(self, event_type: str, payload: Any) -> Optional[AppendResult]:
        # the engine lock is a threading.Lock, so the blocking part runs off the event loop
        return await asyncio.to_thread(self.log, event_type, payload)

    def _report(self, message: str, error: EventLogError) -> None:
        try:
            self.sink.report(service=SERVICE_NAME, level="error", message=message, extra={"error": error})
        except Exception as e:
            log.error(f"diagnostic sink failed while reporting {message!r}: {e}")
