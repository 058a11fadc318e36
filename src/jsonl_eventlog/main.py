# jsonl-eventlog/src/jsonl_eventlog/main.py
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .config import settings
from .hooks import create_hook
from .logging_cfg import get_logger, init_logging

log = get_logger(__name__)


def _pump(stream: TextIO, hook) -> int:
    count = 0
    for lineno, raw in enumerate(stream, start=1):
        raw = raw.strip()
        if not raw:
            continue
        try:
            event = json.loads(raw)
        except json.JSONDecodeError as e:
            log.warning(f"line {lineno}: invalid JSON skipped ({e})")
            continue
        if not isinstance(event, dict):
            log.warning(f"line {lineno}: expected a JSON object, skipped")
            continue
        if hook.handle(event):
            count += 1
    return count


def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None) -> int:
    parser = argparse.ArgumentParser(prog="jsonl-eventlog", description="Append events to a rotating JSONL log")
    parser.add_argument("--root", type=str, default=".", help="Project root the log directory is resolved against")
    parser.add_argument("--event", type=str, help="Log a single event of this type")
    parser.add_argument("--payload", type=str, default="null", help="JSON payload for --event")
    parser.add_argument("--all", action="store_true", help="Do not restrict to supported event types or scope")
    args = parser.parse_args(argv)

    init_logging()

    root = Path(args.root).expanduser().resolve()
    if not root.is_dir():
        print(f"Root not found: {root}", file=sys.stderr)
        return 3

    hook = create_hook(root, config=settings, supported_only=not args.all)
    if args.all:
        hook.scope = None

    if args.event:
        try:
            payload = json.loads(args.payload)
        except json.JSONDecodeError as e:
            print(f"--payload is not valid JSON: {e}", file=sys.stderr)
            return 2
        hook.logger.log(args.event, payload)
        return 0

    count = _pump(stdin or sys.stdin, hook)
    log.info(f"logged {count} event(s) to {hook.logger.log_file_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
