"""
Time-bucketed aggregation of queue visits.

Every report chart is the same computation: keep the visits inside a time
window, drop each one into a bucket (hour of day, weekday, business day or
calendar day), and count or accumulate a value per category inside the
bucket. All buckets of the window are always emitted, zero-filled, so a
chart axis stays continuous.
"""

import calendar
from collections import defaultdict
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time, timedelta, tzinfo
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

UNKNOWN_SERVICE = "Unknown Service"

HOURS = [f"{hour:02d}" for hour in range(24)]
WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]


class BucketUnit(str, Enum):
    """How visits are grouped along the time axis."""
    HOUR = "hour"
    WEEKDAY = "weekday"
    BUSINESS_DAY = "business_day"
    CALENDAR_DAY = "calendar_day"


class WindowKind(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    RANGE = "range"


def _day_start(day: date, tz: Optional[tzinfo]) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz)


def _day_end(day: date, tz: Optional[tzinfo]) -> datetime:
    return datetime.combine(day, time.max, tzinfo=tz)


@dataclass(frozen=True)
class TimeWindow:
    """An inclusive ``[start, end]`` span of whole local days."""
    start: datetime
    end: datetime
    kind: WindowKind = WindowKind.RANGE

    @classmethod
    def for_range(cls, first: date, last: date, tz: Optional[tzinfo] = None) -> "TimeWindow":
        if last < first:
            raise ValueError("Range end is before its start")
        return cls(_day_start(first, tz), _day_end(last, tz), WindowKind.RANGE)

    @classmethod
    def for_day(cls, day: date, tz: Optional[tzinfo] = None) -> "TimeWindow":
        return cls(_day_start(day, tz), _day_end(day, tz), WindowKind.DAY)

    @classmethod
    def for_week(cls, year: int, week: int, tz: Optional[tzinfo] = None) -> "TimeWindow":
        """ISO week ``week`` of ``year``, Monday through Sunday."""
        monday = date.fromisocalendar(year, week, 1)
        return cls(_day_start(monday, tz), _day_end(monday + timedelta(days=6), tz), WindowKind.WEEK)

    @classmethod
    def for_month(cls, year: int, month: int, tz: Optional[tzinfo] = None) -> "TimeWindow":
        last_day = calendar.monthrange(year, month)[1]
        return cls(
            _day_start(date(year, month, 1), tz),
            _day_end(date(year, month, last_day), tz),
            WindowKind.MONTH
        )

    @property
    def tz(self) -> Optional[tzinfo]:
        return self.start.tzinfo

    @property
    def first_day(self) -> date:
        return self.start.date()

    @property
    def last_day(self) -> date:
        return self.end.date()

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end

    def days(self) -> List[date]:
        span = (self.last_day - self.first_day).days
        return [self.first_day + timedelta(days=offset) for offset in range(span + 1)]

    def previous(self) -> "TimeWindow":
        """The comparably sized window immediately before this one."""
        if self.kind == WindowKind.DAY:
            return TimeWindow.for_day(self.first_day - timedelta(days=1), self.tz)
        if self.kind == WindowKind.WEEK:
            year, week, _ = (self.first_day - timedelta(days=7)).isocalendar()
            return TimeWindow.for_week(year, week, self.tz)
        if self.kind == WindowKind.MONTH:
            last_of_previous = self.first_day - timedelta(days=1)
            return TimeWindow.for_month(last_of_previous.year, last_of_previous.month, self.tz)

        length = len(self.days())
        return TimeWindow.for_range(
            self.first_day - timedelta(days=length),
            self.first_day - timedelta(days=1),
            self.tz
        )


@dataclass
class Bucket:
    """One point on a chart axis with a total per category."""
    key: str
    label: str
    totals: Dict[str, float] = field(default_factory=dict)

    @property
    def total(self) -> float:
        return sum(self.totals.values())


def bucket_keys(window: TimeWindow, unit: BucketUnit) -> List[str]:
    """Every bucket key of ``window`` in chart order."""
    if unit == BucketUnit.HOUR:
        return list(HOURS)
    if unit == BucketUnit.WEEKDAY:
        return list(WEEKDAYS)
    if unit == BucketUnit.BUSINESS_DAY:
        return [day.isoformat() for day in window.days() if day.weekday() < 5]
    return [day.isoformat() for day in window.days()]


def bucket_key(moment: datetime, unit: BucketUnit) -> Optional[str]:
    """Bucket key for a timestamp, or None when the unit excludes it."""
    if unit == BucketUnit.HOUR:
        return f"{moment.hour:02d}"

    weekday = moment.weekday()
    if unit == BucketUnit.WEEKDAY:
        return WEEKDAYS[weekday] if weekday < 5 else None
    if unit == BucketUnit.BUSINESS_DAY and weekday >= 5:
        return None
    return moment.date().isoformat()


def aggregate(
    records: Iterable[Any],
    window: TimeWindow,
    unit: BucketUnit,
    category: Callable[[Any], Optional[str]],
    timestamp: Callable[[Any], datetime],
    value: Optional[Callable[[Any], Optional[float]]] = None,
    categories: Sequence[str] = (),
    mean: bool = False
) -> List[Bucket]:
    """
    Group ``records`` into the buckets of ``window``.

    Without ``value`` each record counts as one for its category. With
    ``value`` the extracted numbers are summed, or averaged when ``mean`` is
    set; records whose value is missing are skipped. Categories listed in
    ``categories`` always appear, followed by any other category seen in
    the data. A record without a category is counted under
    ``UNKNOWN_SERVICE``.
    """
    keys = bucket_keys(window, unit)
    columns: List[str] = list(dict.fromkeys(categories))
    known = set(columns)

    sums: Dict[str, Dict[str, float]] = {key: defaultdict(int) for key in keys}
    counts: Dict[str, Dict[str, int]] = {key: defaultdict(int) for key in keys}

    for record in records:
        moment = timestamp(record)
        if not window.contains(moment):
            continue

        key = bucket_key(moment, unit)
        if key not in sums:
            continue

        name = category(record) or UNKNOWN_SERVICE
        if name not in known:
            known.add(name)
            columns.append(name)

        if value is None:
            sums[key][name] += 1
            continue

        amount = value(record)
        if amount is None:
            continue
        sums[key][name] += amount
        counts[key][name] += 1

    buckets = []
    for key in keys:
        totals = {}
        for name in columns:
            total = sums[key].get(name, 0)
            if mean:
                seen = counts[key].get(name, 0)
                total = total / seen if seen else 0
            totals[name] = total
        buckets.append(Bucket(key=key, label=key, totals=totals))
    return buckets


def relabel(buckets: List[Bucket], label: Callable[[str], str]) -> List[Bucket]:
    """Return copies of ``buckets`` with display labels derived from their keys."""
    return [replace(bucket, label=label(bucket.key)) for bucket in buckets]


@dataclass
class BucketSummary:
    """Headline numbers shown beside a chart."""
    total: float = 0
    average_per_bucket: float = 0
    busiest_bucket: Optional[str] = None
    quietest_bucket: Optional[str] = None
    most_popular: Optional[str] = None
    least_popular: Optional[str] = None
    category_totals: Dict[str, float] = field(default_factory=dict)


def summarize(buckets: List[Bucket]) -> BucketSummary:
    if not buckets:
        return BucketSummary()

    category_totals: Dict[str, float] = defaultdict(int)
    for bucket in buckets:
        for name, amount in bucket.totals.items():
            category_totals[name] += amount

    total = sum(category_totals.values())
    busiest = max(buckets, key=lambda bucket: bucket.total)
    quietest = min(buckets, key=lambda bucket: bucket.total)

    summary = BucketSummary(
        total=total,
        average_per_bucket=total / len(buckets),
        busiest_bucket=busiest.label if busiest.total > 0 else None,
        quietest_bucket=quietest.label,
        category_totals=dict(category_totals)
    )
    if category_totals:
        summary.most_popular = max(category_totals, key=category_totals.get)
        summary.least_popular = min(category_totals, key=category_totals.get)
    return summary
