# jsonl-eventlog/src/jsonl_eventlog/fs.py
from __future__ import annotations

import os
from pathlib import Path
from typing import List


class LocalFilesystem:
    """Thin wrapper over the local filesystem.

    Every method raises ``OSError`` on failure; deciding what a failure means is
    left to the caller. Tests subclass this to inject faults.
    """

    def size(self, path: Path) -> int:
        return path.stat().st_size

    def append_text(self, path: Path, text: str) -> None:
        # one write() per call keeps a small line contiguous in the file
        with path.open("a", encoding="utf-8") as f:
            f.write(text)

    def rename(self, src: Path, dst: Path) -> None:
        os.rename(src, dst)

    def listdir(self, path: Path) -> List[str]:
        return os.listdir(path)

    def remove(self, path: Path) -> None:
        path.unlink()

    def makedirs(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)
