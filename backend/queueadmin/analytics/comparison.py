"""
Period-over-period metrics for the report cards and the team table.
"""

import math
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Sequence


def percent_change(current: float, previous: float) -> float:
    """
    Percentage change from ``previous`` to ``current``.

    A previous value of zero reports a 100% increase, whatever the current
    value is.
    """
    if previous == 0:
        return 100.0
    return (current - previous) / previous * 100


def average_or_zero(values: Iterable[float]) -> float:
    values = list(values)
    if not values:
        return 0
    return sum(values) / len(values)


def round_half_up(value: float) -> int:
    """Nearest whole number, with halves rounded up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def format_minutes(minutes: float) -> str:
    """Render a duration in minutes as ``HH:MM:SS``."""
    total_seconds = int(minutes * 60)
    hours, remainder = divmod(total_seconds, 3600)
    mins, secs = divmod(remainder, 60)
    return f"{hours:02d}:{mins:02d}:{secs:02d}"


def _numbers(visits: Iterable[Mapping[str, Any]], field: str) -> List[float]:
    return [visit[field] for visit in visits if visit.get(field) is not None]


@dataclass
class MetricChange:
    value: float
    change_percent: float


@dataclass
class PeriodMetrics:
    customers: int = 0
    avg_wait_time: float = 0
    avg_service_time: float = 0

    @classmethod
    def from_visits(cls, visits: Sequence[Mapping[str, Any]]) -> "PeriodMetrics":
        # Averages only cover visits that carry the timing (completed ones)
        return cls(
            customers=len(visits),
            avg_wait_time=average_or_zero(_numbers(visits, "waitingTime")),
            avg_service_time=average_or_zero(_numbers(visits, "servingTime"))
        )


def compare(current: PeriodMetrics, previous: PeriodMetrics) -> Dict[str, MetricChange]:
    """Metric cards for a period against the one before it."""
    return {
        "customers": MetricChange(
            value=current.customers,
            change_percent=percent_change(current.customers, previous.customers)
        ),
        "avg_wait_time": MetricChange(
            value=round_half_up(current.avg_wait_time),
            change_percent=percent_change(current.avg_wait_time, previous.avg_wait_time)
        ),
        "avg_service_time": MetricChange(
            value=round_half_up(current.avg_service_time),
            change_percent=percent_change(current.avg_service_time, previous.avg_service_time)
        ),
    }


@dataclass
class TellerPerformance:
    teller_id: str
    name: str
    visitors_served: int
    total_service_time: str
    avg_service_time: str
    total_waiting_time: str
    avg_waiting_time: str


def team_performance(
    tellers: Sequence[Mapping[str, Any]],
    visits: Iterable[Mapping[str, Any]]
) -> List[TellerPerformance]:
    """Completed-visit totals and averages for every teller."""
    served: Dict[str, List[Mapping[str, Any]]] = defaultdict(list)
    for visit in visits:
        if visit.get("status") == "completed":
            served[visit.get("teller")].append(visit)

    rows = []
    for teller in tellers:
        own = served.get(teller["_id"], [])
        service_total = sum(visit.get("servingTime") or 0 for visit in own)
        waiting_total = sum(visit.get("waitingTime") or 0 for visit in own)
        count = len(own)
        rows.append(TellerPerformance(
            teller_id=teller["_id"],
            name=teller.get("name", ""),
            visitors_served=count,
            total_service_time=format_minutes(service_total),
            avg_service_time=format_minutes(service_total / count if count else 0),
            total_waiting_time=format_minutes(waiting_total),
            avg_waiting_time=format_minutes(waiting_total / count if count else 0)
        ))
    return rows
