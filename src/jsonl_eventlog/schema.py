# jsonl-eventlog/src/jsonl_eventlog/schema.py
from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class LogEntry(BaseModel):
    """One persisted record; maps to exactly one line in one file."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    timestamp: str
    event_type: str = Field(alias="eventType")
    payload: Any = None

    def wire_dict(self) -> Dict[str, Any]:
        # payload is passed through untouched so json.dumps decides what is encodable
        return {"timestamp": self.timestamp, "eventType": self.event_type, "payload": self.payload}
