"""Turn an (event type, payload) pair into one newline-terminated JSON record."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from .errors import SerializationError
from .schema import LogEntry
from .timestamps import iso_timestamp


def serialize(event_type: str, payload: Any, now: datetime) -> str:
    """Encode an entry as ``{"timestamp", "eventType", "payload"}`` plus ``\\n``.

    Raises ``SerializationError`` for cyclic structures, unsupported objects and
    non-finite floats (which are not valid JSON), and for text that cannot be
    encoded as UTF-8. Nothing is written here.
    """
    try:
        entry = LogEntry(timestamp=iso_timestamp(now), eventType=event_type, payload=payload)
    except ValidationError as exc:
        raise SerializationError(f"invalid entry for {event_type!r}: {exc}") from exc
    try:
        line = json.dumps(entry.wire_dict(), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError, RecursionError) as exc:
        raise SerializationError(f"cannot serialize payload for {event_type!r}: {exc}") from exc
    try:
        # lone surrogates (e.g. surrogateescape'd filenames) survive json.dumps but not UTF-8
        line.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise SerializationError(f"payload for {event_type!r} is not valid UTF-8: {exc}") from exc
    return f"{line}\n"
