# jsonl-eventlog/src/jsonl_eventlog/diagnostics.py
from __future__ import annotations

import logging
import queue
import threading
import time
from typing import Any, Dict, Iterable, List, Optional, Protocol

import requests

from .config import Settings, settings
from .logging_cfg import get_logger

log = get_logger(__name__)

SERVICE_NAME = "jsonl-eventlog"


class DiagnosticSink(Protocol):
    def report(self, *, service: str, level: str, message: str, extra: Dict[str, Any]) -> None:
        ...


class LoggingSink:
    """Route diagnostics to the process logger."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or get_logger("jsonl_eventlog.diagnostics")

    def report(self, *, service: str, level: str, message: str, extra: Dict[str, Any]) -> None:
        error = extra.get("error")
        exc_info = error if isinstance(error, BaseException) else None
        self.logger.log(
            getattr(logging, level.upper(), logging.ERROR),
            message,
            exc_info=exc_info,
            extra={"service": service, "error": error},
        )


class WebhookSink:
    """POST diagnostics as JSON from a background thread.

    ``report`` only enqueues, so a slow endpoint never holds up a write. The
    queue is bounded; while it is full new reports are dropped and counted.
    """

    def __init__(self, url: str, timeout_s: float = 5.0, max_pending: int = 1000) -> None:
        self.url = url
        self.timeout_s = timeout_s
        self.dropped = 0
        self._q: "queue.Queue[Optional[Dict[str, Any]]]" = queue.Queue(maxsize=max_pending)
        self._worker = threading.Thread(target=self._run, name="diagnostic-webhook", daemon=True)
        self._worker.start()

    def report(self, *, service: str, level: str, message: str, extra: Dict[str, Any]) -> None:
        body = {
            "service": service,
            "level": level,
            "message": message,
            "extra": {k: (str(v) if isinstance(v, BaseException) else v) for k, v in extra.items()},
        }
        try:
            self._q.put_nowait(body)
        except queue.Full:
            self.dropped += 1
            log.warning(f"diagnostic webhook backlog full, dropped {message!r} ({self.dropped} dropped so far)")

    def _run(self) -> None:
        while True:
            item = self._q.get()
            try:
                if item is None:
                    break
                self._post(item)
            finally:
                self._q.task_done()

    def _post(self, body: Dict[str, Any]) -> None:
        try:
            resp = requests.post(self.url, json=body, timeout=self.timeout_s)
            if not (200 <= resp.status_code < 300):
                log.warning(f"diagnostic webhook HTTP {resp.status_code}")
        except requests.RequestException as e:
            log.warning(f"diagnostic webhook post failed: {e}")
        time.sleep(0.05)  # rate limit cushion

    def flush(self) -> None:
        """Block until everything reported so far has been posted."""
        self._q.join()

    def close(self) -> None:
        try:
            self._q.put(None, timeout=self.timeout_s)
        except queue.Full:
            log.warning("diagnostic webhook still backlogged at close")
            return
        self._worker.join(timeout=5)


class CompositeSink:
    def __init__(self, sinks: Iterable[DiagnosticSink]) -> None:
        self.sinks: List[DiagnosticSink] = list(sinks)

    def report(self, *, service: str, level: str, message: str, extra: Dict[str, Any]) -> None:
        for sink in self.sinks:
            try:
                sink.report(service=service, level=level, message=message, extra=extra)
            except Exception as e:
                log.warning(f"diagnostic sink {type(sink).__name__} failed: {e}")


def build_sink(config: Optional[Settings] = None) -> DiagnosticSink:
    cfg = config or settings
    sinks: List[DiagnosticSink] = [LoggingSink()]
    if cfg.DIAGNOSTIC_WEBHOOK_URL:
        sinks.append(WebhookSink(str(cfg.DIAGNOSTIC_WEBHOOK_URL)))
    return sinks[0] if len(sinks) == 1 else CompositeSink(sinks)
