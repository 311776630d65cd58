"""
Audit trail of admin actions.
"""

import logging
from datetime import date
from typing import List, Optional

from ..analytics import TimeWindow
from ..config import get_settings
from ..models.log import LogEntry, LogLevel

settings = get_settings()
logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {"timestamp", "level", "message", "email"}


class AuditLogService:
    """Append-only log entries shown on the Logs page."""

    def __init__(self, store):
        self.store = store

    async def record(
        self,
        message: str,
        email: Optional[str] = None,
        level: LogLevel = LogLevel.INFO
    ) -> LogEntry:
        doc = await self.store.insert(
            "logs",
            {"level": level.value, "message": message, "email": email or "Unknown user"},
            timestamp_field="timestamp"
        )
        logger.info("Audit [%s] %s (%s)", level.value, message, email)
        return LogEntry(**doc)

    async def list_for_day(
        self,
        day: date,
        sort: str = "timestamp",
        descending: bool = True,
        limit: Optional[int] = None
    ) -> List[LogEntry]:
        if sort not in SORTABLE_FIELDS:
            raise ValueError(f"Cannot sort logs by {sort}")

        window = TimeWindow.for_day(day, self.store.tz)
        docs = await self.store.find(
            "logs",
            {"timestamp": {"$gte": window.start, "$lte": window.end}},
            sort=[(sort, -1 if descending else 1)],
            limit=limit or settings.LOG_LIMIT
        )
        return [LogEntry(**doc) for doc in docs]
