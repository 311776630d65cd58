from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from queueadmin.analytics import (
    HOURS,
    UNKNOWN_SERVICE,
    WEEKDAYS,
    Bucket,
    BucketUnit,
    TimeWindow,
    WindowKind,
    aggregate,
    bucket_key,
    relabel,
    summarize,
)

UTC = ZoneInfo("UTC")


def visit(moment, service="Passport", **fields):
    return {"joinedOn": moment, "service": service, **fields}


def by_service(records, window, unit, **kwargs):
    return aggregate(
        records,
        window,
        unit,
        category=lambda record: record.get("service"),
        timestamp=lambda record: record["joinedOn"],
        **kwargs
    )


def test_hourly_counts_land_in_their_hour():
    day = date(2024, 3, 6)
    records = [
        visit(datetime(2024, 3, 6, 9, 5, tzinfo=UTC)),
        visit(datetime(2024, 3, 6, 9, 55, tzinfo=UTC)),
        visit(datetime(2024, 3, 6, 14, 0, tzinfo=UTC)),
    ]

    buckets = by_service(records, TimeWindow.for_day(day, UTC), BucketUnit.HOUR)

    assert [bucket.key for bucket in buckets] == HOURS
    totals = {bucket.key: bucket.totals for bucket in buckets}
    assert totals["09"] == {"Passport": 2}
    assert totals["14"] == {"Passport": 1}
    assert all(totals[hour] == {"Passport": 0} for hour in HOURS if hour not in ("09", "14"))


def test_empty_windows_still_emit_every_bucket():
    categories = ["Passport", "Licence"]
    week = TimeWindow.for_week(2024, 10, UTC)

    hourly = by_service([], TimeWindow.for_day(date(2024, 3, 6), UTC), BucketUnit.HOUR, categories=categories)
    weekdays = by_service([], week, BucketUnit.WEEKDAY, categories=categories)
    calendar_days = by_service([], week, BucketUnit.CALENDAR_DAY, categories=categories)

    assert len(hourly) == 24
    assert [bucket.key for bucket in weekdays] == WEEKDAYS
    assert len(calendar_days) == 7
    for bucket in hourly + weekdays + calendar_days:
        assert bucket.totals == {"Passport": 0, "Licence": 0}


def test_weekday_bucketing_skips_weekends():
    saturday = datetime(2024, 3, 9, 10, tzinfo=UTC)
    sunday = datetime(2024, 3, 10, 10, tzinfo=UTC)
    week = TimeWindow.for_week(2024, 10, UTC)

    buckets = by_service([visit(saturday), visit(sunday)], week, BucketUnit.WEEKDAY)

    assert bucket_key(saturday, BucketUnit.WEEKDAY) is None
    assert bucket_key(sunday, BucketUnit.BUSINESS_DAY) is None
    assert "Saturday" not in [bucket.key for bucket in buckets]
    assert sum(bucket.total for bucket in buckets) == 0


def test_business_days_of_a_week_are_monday_to_friday():
    buckets = by_service([], TimeWindow.for_week(2024, 10, UTC), BucketUnit.BUSINESS_DAY)

    assert [bucket.key for bucket in buckets] == [
        "2024-03-04", "2024-03-05", "2024-03-06", "2024-03-07", "2024-03-08"
    ]


def test_records_outside_the_window_are_ignored():
    window = TimeWindow.for_day(date(2024, 3, 6), UTC)
    records = [visit(datetime(2024, 3, 5, 23, 59, tzinfo=UTC)), visit(datetime(2024, 3, 7, 0, 0, tzinfo=UTC))]

    buckets = by_service(records, window, BucketUnit.HOUR)

    assert sum(bucket.total for bucket in buckets) == 0


def test_missing_category_counts_as_unknown_service():
    window = TimeWindow.for_day(date(2024, 3, 6), UTC)
    records = [visit(datetime(2024, 3, 6, 11, tzinfo=UTC), service=None)]

    buckets = by_service(records, window, BucketUnit.HOUR, categories=["Passport"])

    assert buckets[11].totals == {"Passport": 0, UNKNOWN_SERVICE: 1}
    assert buckets[0].totals == {"Passport": 0, UNKNOWN_SERVICE: 0}


def test_mean_skips_records_without_a_value():
    window = TimeWindow.for_day(date(2024, 3, 6), UTC)
    records = [
        visit(datetime(2024, 3, 6, 9, tzinfo=UTC), waitingTime=10),
        visit(datetime(2024, 3, 6, 9, tzinfo=UTC), waitingTime=20),
        visit(datetime(2024, 3, 6, 9, tzinfo=UTC), waitingTime=None),
    ]

    buckets = by_service(
        records, window, BucketUnit.HOUR, value=lambda record: record.get("waitingTime"), mean=True
    )

    assert buckets[9].totals == {"Passport": 15}
    assert buckets[10].totals == {"Passport": 0}


def test_local_time_decides_the_bucket():
    nairobi = ZoneInfo("Africa/Nairobi")
    window = TimeWindow.for_day(date(2024, 3, 6), nairobi)
    # 06:30 UTC is 09:30 in Nairobi
    moment = datetime(2024, 3, 6, 6, 30, tzinfo=UTC).astimezone(nairobi)

    buckets = by_service([visit(moment)], window, BucketUnit.HOUR)

    assert buckets[9].totals == {"Passport": 1}


@pytest.mark.parametrize("window, expected", [
    (TimeWindow.for_day(date(2024, 3, 1)), (date(2024, 2, 29), date(2024, 2, 29))),
    (TimeWindow.for_week(2024, 1), (date(2023, 12, 25), date(2023, 12, 31))),
    (TimeWindow.for_month(2024, 3), (date(2024, 2, 1), date(2024, 2, 29))),
    (TimeWindow.for_range(date(2024, 3, 11), date(2024, 3, 20)), (date(2024, 3, 1), date(2024, 3, 10))),
])
def test_previous_window(window, expected):
    previous = window.previous()

    assert (previous.first_day, previous.last_day) == expected
    assert previous.kind == window.kind


def test_range_rejects_reversed_dates():
    with pytest.raises(ValueError):
        TimeWindow.for_range(date(2024, 3, 2), date(2024, 3, 1))


def test_month_window_covers_every_day():
    window = TimeWindow.for_month(2024, 2, UTC)

    assert window.kind == WindowKind.MONTH
    assert len(window.days()) == 29


def test_summary_picks_busiest_and_most_popular():
    buckets = [
        Bucket("09", "09", {"Passport": 3, "Licence": 1}),
        Bucket("10", "10", {"Passport": 0, "Licence": 0}),
        Bucket("11", "11", {"Passport": 1, "Licence": 1}),
    ]

    summary = summarize(buckets)

    assert summary.total == 6
    assert summary.average_per_bucket == 2
    assert summary.busiest_bucket == "09"
    assert summary.quietest_bucket == "10"
    assert summary.most_popular == "Passport"
    assert summary.least_popular == "Licence"


def test_summary_of_an_empty_chart():
    buckets = by_service([], TimeWindow.for_day(date(2024, 3, 6), UTC), BucketUnit.HOUR)

    summary = summarize(buckets)

    assert summary.total == 0
    assert summary.busiest_bucket is None
    assert summary.most_popular is None


def test_relabel_keeps_keys():
    buckets = relabel([Bucket("2024-03-04", "2024-03-04", {})], lambda key: key[-2:])

    assert buckets[0].key == "2024-03-04"
    assert buckets[0].label == "04"
