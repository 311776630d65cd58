"""
Opening hours service.
"""

from typing import List, Optional

from ..models.base import STATUS_FIELD
from ..models.schedule import WEEK_DAYS, HoursRange, OpeningHours, OpeningHoursUpdate
from .log_service import AuditLogService


class ScheduleService:
    """One opening-hours document per weekday, created on first save."""

    def __init__(self, store, audit: Optional[AuditLogService] = None):
        self.store = store
        self.audit = audit or AuditLogService(store)

    async def week(self) -> List[OpeningHours]:
        """All seven days in calendar order; unsaved days are closed 08:00-16:00."""
        docs = {doc.get("name"): doc for doc in await self.store.find("days")}
        return [
            OpeningHours(**docs[day]) if day in docs else OpeningHours(name=day)
            for day in WEEK_DAYS
        ]

    async def _save(self, day: str, fields: dict) -> OpeningHours:
        existing = await self.store.find_one("days", {"name": day})
        if existing:
            doc = await self.store.update("days", existing["_id"], fields)
        else:
            doc = await self.store.insert("days", {"name": day, **fields}, timestamp_field=None)
        return OpeningHours(**doc)

    async def save_day(self, day: str, data: OpeningHoursUpdate, actor: Optional[str] = None) -> OpeningHours:
        day = day.capitalize()
        if day not in WEEK_DAYS:
            raise ValueError(f"Unknown day: {day}")

        hours = await self._save(day, {
            STATUS_FIELD: data.enabled,
            "startTime": data.start_time,
            "endTime": data.end_time
        })
        await self.audit.record(
            f"Opening hours updated for {day}: {data.start_time} - {data.end_time}",
            actor
        )
        return hours

    async def apply_universal(self, data: HoursRange, actor: Optional[str] = None) -> List[OpeningHours]:
        """Give every day the same hours, keeping each day's open/closed flag."""
        current = {hours.name: hours for hours in await self.week()}
        week = []
        for day in WEEK_DAYS:
            week.append(await self._save(day, {
                STATUS_FIELD: current[day].enabled,
                "startTime": data.start_time,
                "endTime": data.end_time
            }))
        await self.audit.record(
            f"Universal time applied: {data.start_time} - {data.end_time}",
            actor
        )
        return week
