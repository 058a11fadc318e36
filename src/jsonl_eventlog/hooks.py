# jsonl-eventlog/src/jsonl_eventlog/hooks.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

from .config import Settings, settings
from .diagnostics import DiagnosticSink
from .logger import EventLogger
from .logging_cfg import get_logger
from .scope import SUPPORTED_EVENTS, should_log_event

log = get_logger(__name__)


class EventHook:
    """Entry point the host calls for every event it emits."""

    def __init__(self, logger: EventLogger, scope: Optional[str] = None, supported_only: bool = True) -> None:
        self.logger = logger
        self.scope = scope
        self.supported_only = supported_only

    def accepts(self, event_type: Any) -> bool:
        if not isinstance(event_type, str):
            return False
        if self.supported_only and event_type not in SUPPORTED_EVENTS:
            return False
        return should_log_event(event_type, self.scope)

    def handle(self, event: Mapping[str, Any]) -> bool:
        """Log ``event`` under its ``type`` with the whole event as payload."""
        event_type = event.get("type")
        if not self.accepts(event_type):
            return False
        self.logger.log(event_type, dict(event))
        return True

    async def handle_async(self, event: Mapping[str, Any]) -> bool:
        event_type = event.get("type")
        if not self.accepts(event_type):
            return False
        await self.logger.log_async(event_type, dict(event))
        return True


def create_hook(
    project_root: str | Path,
    config: Optional[Settings] = None,
    sink: Optional[DiagnosticSink] = None,
    supported_only: bool = True,
) -> EventHook:
    cfg = config or settings
    logger = EventLogger(project_root, config=cfg, sink=sink)
    logger.init()
    log.info(f"event logger initialized at {logger.log_file_path}")
    return EventHook(logger, scope=cfg.EVENTLOG_SCOPE, supported_only=supported_only)
