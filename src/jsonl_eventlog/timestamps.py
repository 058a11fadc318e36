from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(moment: datetime) -> datetime:
    # naive values are taken to already be UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def iso_timestamp(moment: datetime) -> str:
    """``2026-10-19T02:42:00.123Z``: UTC, millisecond precision, ``Z`` suffix."""
    return _as_utc(moment).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def archive_stamp(moment: datetime) -> str:
    """Fixed-width, colon-free stamp for archive names: ``2026-10-19T02-42-00``.

    Zero padding and the fixed field order make lexicographic order equal to
    chronological order.
    """
    return _as_utc(moment).strftime("%Y-%m-%dT%H-%M-%S")
