from __future__ import annotations

import os
import re
from pathlib import Path
from typing import List, Tuple

from .fs import LocalFilesystem
from .logging_cfg import get_logger

log = get_logger(__name__)


def split_filename(filename: str) -> Tuple[str, str]:
    """``log.jsonl`` -> (``log``, ``.jsonl``); ``events`` -> (``events``, ``""``)."""
    return os.path.splitext(filename)


def archive_name(base_filename: str, stamp: str, short_id: str) -> str:
    base, ext = split_filename(base_filename)
    return f"{base}.{stamp}-{short_id}{ext}"


def archive_pattern(base_filename: str) -> re.Pattern[str]:
    base, ext = split_filename(base_filename)
    return re.compile(rf"^{re.escape(base)}\..+{re.escape(ext)}$")


def list_archives(fs: LocalFilesystem, log_dir: Path, base_filename: str) -> List[str]:
    """Archive names in ``log_dir``, oldest first.

    The stamp follows the base name, so a plain string sort is chronological.
    An unreadable directory yields no archives.
    """
    try:
        entries = fs.listdir(log_dir)
    except OSError as e:
        log.debug(f"cannot list {log_dir}: {e}")
        return []
    pattern = archive_pattern(base_filename)
    return sorted(name for name in entries if name != base_filename and pattern.match(name))


def prune_archives(fs: LocalFilesystem, log_dir: Path, base_filename: str, max_files: int) -> List[Path]:
    """Delete the oldest archives beyond ``max_files``; return what was removed.

    ``max_files <= 0`` means unlimited retention. A file that refuses to go is
    left for the next pass.
    """
    if max_files <= 0:
        return []
    archives = list_archives(fs, log_dir, base_filename)
    excess = len(archives) - max_files
    if excess <= 0:
        return []
    removed: List[Path] = []
    for name in archives[:excess]:
        path = log_dir / name
        try:
            fs.remove(path)
        except OSError as e:
            log.debug(f"prune skipped {path}: {e}")
            continue
        removed.append(path)
    if removed:
        log.info(f"pruned {len(removed)} archive(s) from {log_dir}")
    return removed
