from __future__ import annotations

__version__ = "0.3.0"

from .engine import AppendResult, RotatingAppendEngine
from .errors import (
    AppendError,
    ConfigParseError,
    EventLogError,
    InitializationError,
    RotationError,
    SerializationError,
)
from .hooks import EventHook, create_hook
from .logger import EventLogger
from .scope import SUPPORTED_EVENTS, should_log_event
from .serializer import serialize

__all__ = [
    "AppendError",
    "AppendResult",
    "ConfigParseError",
    "EventHook",
    "EventLogError",
    "EventLogger",
    "InitializationError",
    "RotatingAppendEngine",
    "RotationError",
    "SUPPORTED_EVENTS",
    "SerializationError",
    "create_hook",
    "serialize",
    "should_log_event",
]
