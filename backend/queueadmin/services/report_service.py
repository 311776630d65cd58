"""
Report service.

Each report page picks a time window and a bucket unit; the counting,
averaging and period comparison all go through ``queueadmin.analytics``.
"""

import logging
from datetime import date
from enum import Enum
from typing import Callable, Dict, List, Optional

from ..analytics import (
    UNKNOWN_SERVICE,
    BucketUnit,
    PeriodMetrics,
    TimeWindow,
    aggregate,
    compare,
    relabel,
    summarize,
    team_performance
)
from ..models.base import NAME_FIELDS
from ..models.queue import VisitStatus
from ..models.report import MetricCards, TeamReport, VisitChart

logger = logging.getLogger(__name__)

SHORT_WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


class ChartMetric(str, Enum):
    """What a visit chart plots per bucket and service."""
    VISITS = "visits"
    WAIT_TIME = "wait_time"
    SERVICE_TIME = "service_time"


# Metric -> visit field averaged per bucket
METRIC_FIELDS = {
    ChartMetric.WAIT_TIME: "waitingTime",
    ChartMetric.SERVICE_TIME: "servingTime",
}


def weekday_label(key: str) -> str:
    return SHORT_WEEKDAYS[date.fromisoformat(key).weekday()]


def day_of_month_label(key: str) -> str:
    return key[-2:]


class ReportService:
    """Historical analytics over the ``queues`` collection."""

    def __init__(self, store):
        self.store = store

    @property
    def tz(self):
        return self.store.tz

    async def _visits(self, window: TimeWindow, time_field: str = "joinedOn", **filters) -> List[dict]:
        query = {time_field: {"$gte": window.start, "$lte": window.end}, **filters}
        return await self.store.find("queues", query)

    async def _service_names(self) -> Dict[str, str]:
        name_field = NAME_FIELDS["services"]
        docs = await self.store.find("services", sort=[(name_field, 1)])
        return {doc["_id"]: doc.get(name_field) or UNKNOWN_SERVICE for doc in docs}

    # Metric cards

    async def metric_cards(self, window: TimeWindow) -> MetricCards:
        """Customers and average times for ``window`` against the window before it."""
        previous = window.previous()
        current_metrics = PeriodMetrics.from_visits(await self._visits(window))
        previous_metrics = PeriodMetrics.from_visits(await self._visits(previous))

        return MetricCards(
            window_start=window.start,
            window_end=window.end,
            previous_start=previous.start,
            previous_end=previous.end,
            **compare(current_metrics, previous_metrics)
        )

    # Visit charts

    async def visit_chart(
        self,
        window: TimeWindow,
        unit: BucketUnit,
        services: Optional[List[str]] = None,
        metric: ChartMetric = ChartMetric.VISITS,
        label: Optional[Callable[[str], str]] = None
    ) -> VisitChart:
        """
        Visits (or average wait/service minutes) per bucket and service.

        ``services`` limits the chart to the given service ids; without it
        every service is charted and visits of deleted services show up as
        "Unknown Service".
        """
        names = await self._service_names()
        visits = await self._visits(window)

        if services:
            selected = [service_id for service_id in dict.fromkeys(services) if service_id in names]
            visits = [visit for visit in visits if visit.get("service") in selected]
            categories = [names[service_id] for service_id in selected]
        else:
            categories = list(names.values())

        value = None
        if metric in METRIC_FIELDS:
            field = METRIC_FIELDS[metric]
            value = lambda visit: visit.get(field)

        buckets = aggregate(
            visits,
            window,
            unit,
            category=lambda visit: names.get(visit.get("service"), UNKNOWN_SERVICE),
            timestamp=lambda visit: visit["joinedOn"],
            value=value,
            categories=categories,
            mean=value is not None
        )
        if label:
            buckets = relabel(buckets, label)

        return VisitChart(
            unit=unit,
            window_start=window.start,
            window_end=window.end,
            categories=list(buckets[0].totals) if buckets else categories,
            buckets=buckets,
            summary=summarize(buckets)
        )

    async def hourly(self, day: date, **kwargs) -> VisitChart:
        """Every hour of one day, weekends included."""
        return await self.visit_chart(TimeWindow.for_day(day, self.tz), BucketUnit.HOUR, **kwargs)

    async def daily(self, year: int, week: int, **kwargs) -> VisitChart:
        """Monday to Friday of one ISO week."""
        return await self.visit_chart(
            TimeWindow.for_week(year, week, self.tz),
            BucketUnit.BUSINESS_DAY,
            label=weekday_label,
            **kwargs
        )

    async def monthly(self, year: int, month: int, **kwargs) -> VisitChart:
        """Every business day of one month, labelled by day of month."""
        return await self.visit_chart(
            TimeWindow.for_month(year, month, self.tz),
            BucketUnit.BUSINESS_DAY,
            label=day_of_month_label,
            **kwargs
        )

    async def all_time(self, start: date, end: date, **kwargs) -> VisitChart:
        """Every business day of a date range."""
        return await self.visit_chart(
            TimeWindow.for_range(start, end, self.tz),
            BucketUnit.BUSINESS_DAY,
            **kwargs
        )

    async def weekday_comparison(self, start: date, end: date, **kwargs) -> VisitChart:
        """A date range folded onto Monday..Friday."""
        return await self.visit_chart(
            TimeWindow.for_range(start, end, self.tz),
            BucketUnit.WEEKDAY,
            **kwargs
        )

    # Team performance

    async def team(self, window: TimeWindow, time_field: str = "joinedOn") -> TeamReport:
        """Per-teller totals for visits completed in ``window``."""
        tellers = await self.store.find("tellers", sort=[("name", 1)])
        visits = await self._visits(window, time_field, status=VisitStatus.COMPLETED.value)
        return TeamReport(
            window_start=window.start,
            window_end=window.end,
            tellers=team_performance(tellers, visits)
        )
