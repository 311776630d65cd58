"""
Visit tables and today's overview panels.
"""

import logging
from collections import Counter
from datetime import date
from typing import List, Optional

from pydantic import ValidationError

from ..analytics import TimeWindow
from ..config import get_settings
from ..models.queue import VisitRow, VisitStatus
from ..models.report import TodayOverview
from .live_service import LiveStatusProjector, NameResolver

settings = get_settings()
logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {"joinedOn", "startServingTime", "completedOn", "status", "queueCode", "customerName"}


class VisitService:
    """Reads of the ``queues`` collection for tables and the overview page."""

    def __init__(self, store):
        self.store = store

    async def _rows(self, docs: List[dict], resolver: Optional[NameResolver] = None) -> List[VisitRow]:
        resolver = resolver or NameResolver(self.store)
        await resolver.resolve(docs)
        rows = []
        for doc in docs:
            try:
                rows.append(VisitRow(**doc, teller_name=resolver.name("tellers", doc.get("teller"))))
            except ValidationError as e:
                logger.warning("Skipping malformed visit %s: %s", doc.get("_id"), e)
        return rows

    async def table_for_day(
        self,
        day: date,
        sort: str = "joinedOn",
        descending: bool = True,
        limit: Optional[int] = None
    ) -> List[VisitRow]:
        """Visits that joined on ``day``, newest first by default."""
        if sort not in SORTABLE_FIELDS:
            raise ValueError(f"Cannot sort visits by {sort}")

        window = TimeWindow.for_day(day, self.store.tz)
        docs = await self.store.find(
            "queues",
            {"joinedOn": {"$gte": window.start, "$lte": window.end}},
            sort=[(sort, -1 if descending else 1)],
            limit=limit or settings.VISIT_TABLE_LIMIT
        )
        return await self._rows(docs)

    async def today_overview(self, day: Optional[date] = None) -> TodayOverview:
        day = day or self.store.now().date()
        window = TimeWindow.for_day(day, self.store.tz)
        resolver = NameResolver(self.store)

        completed = await self.store.find(
            "queues",
            {
                "status": VisitStatus.COMPLETED.value,
                "completedOn": {"$gte": window.start, "$lte": window.end}
            },
            sort=[("completedOn", -1)]
        )
        served = await self._rows(completed, resolver)
        service_counts = Counter(resolver.name("services", doc.get("service")) for doc in completed)

        sign_ins = await self.store.count(
            "queues",
            {"joinedOn": {"$gte": window.start, "$lte": window.end}}
        )

        serving = await LiveStatusProjector(self.store, VisitStatus.SERVING, resolver=resolver).refresh()
        busy = [visit for visit in serving.visits if window.contains(visit.joined_on)]

        total_desks = await self.store.count("desks")
        return TodayOverview(
            served_today=len(served),
            total_sign_ins=sign_ins,
            service_counts=dict(service_counts),
            served=served,
            busy_tellers=busy,
            total_desks=total_desks,
            desks_available=max(total_desks - len(busy), 0)
        )
