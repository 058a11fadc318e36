from __future__ import annotations

from typing import Optional

# Host event types forwarded to the log by EventHook.
SUPPORTED_EVENTS = frozenset(
    {
        # command
        "command.executed",
        # experimental
        "experimental.session.compacting",
        # file
        "file.edited",
        "file.watcher.updated",
        # installation
        "installation.updated",
        # lsp
        "lsp.client.diagnostics",
        "lsp.updated",
        # message
        "message.part.removed",
        "message.part.updated",
        "message.removed",
        "message.updated",
        # permission
        "permission.asked",
        "permission.replied",
        # server
        "server.connected",
        # session
        "session.compacted",
        "session.created",
        "session.deleted",
        "session.diff",
        "session.error",
        "session.idle",
        "session.status",
        "session.updated",
        # shell
        "shell.env",
        # todo
        "todo.updated",
        # tool
        "tool.execute.after",
        "tool.execute.before",
        # tui
        "tui.command.execute",
        "tui.prompt.append",
        "tui.toast.show",
    }
)


def should_log_event(event_type: str, scope: Optional[str] = None) -> bool:
    """Match ``event_type`` against a comma-separated allow list.

    An empty scope or ``*`` allows everything; ``session.*`` allows any
    ``session.<x>``; anything else must match exactly.
    """
    if not scope or not scope.strip() or scope == "*":
        return True
    for pattern in (p.strip() for p in scope.split(",")):
        if pattern == "*":
            return True
        if pattern.endswith(".*") and event_type.startswith(f"{pattern[:-2]}."):
            return True
        if pattern == event_type:
            return True
    return False
