from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from pydantic import BaseModel

PENDING = "Pending"
COMPLETED = "Completed"


class AgingRecord(BaseModel):
    ticket_id: str
    order_received: str = ""
    type: str = ""
    urgent: str = "No"
    customer: str = ""
    dept: str = "N/A"
    aging: int = 0
    updated_by: str = "GitHub_Automation"


class AnalyticsRecord(AgingRecord):
    status: str = COMPLETED

    def to_aging(self) -> AgingRecord:
        return AgingRecord(**self.model_dump(exclude={"status"}))


class SyncMetadata(BaseModel):
    last_update: str
    updated_by: str
    total_records: int
    analytics_records: int
    updated_at: str


@dataclass
class TransformResult:
    analytics: List[AnalyticsRecord]
    aging: List[AgingRecord]
    skipped: int = 0


@dataclass
class SyncResult:
    analytics_written: int
    aging_written: int
    metadata_written: bool


def to_payload(records: List[BaseModel]) -> List[Dict[str, Any]]:
    return [record.model_dump() for record in records]


__all__ = [
    "AgingRecord",
    "AnalyticsRecord",
    "COMPLETED",
    "PENDING",
    "SyncMetadata",
    "SyncResult",
    "TransformResult",
    "to_payload",
]
