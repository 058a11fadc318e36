# jsonl-eventlog/src/jsonl_eventlog/errors.py
from __future__ import annotations


class EventLogError(Exception):
    """Base class for every failure the event log can report."""


class ConfigParseError(EventLogError):
    """A numeric setting could not be parsed; the default is used instead."""


class InitializationError(EventLogError):
    """The log directory could not be created."""


class SerializationError(EventLogError):
    """The payload cannot be encoded as a JSON line."""


class RotationError(EventLogError):
    """Renaming the active file to its archive name failed."""


class AppendError(EventLogError):
    """Appending a line to the active file failed; the entry is lost."""
