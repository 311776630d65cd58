import pytest

from queueadmin.analytics import (
    PeriodMetrics,
    average_or_zero,
    compare,
    format_minutes,
    percent_change,
    team_performance,
)


@pytest.mark.parametrize("current, previous, expected", [
    (50, 0, 100.0),
    (0, 0, 100.0),
    (80, 40, 100.0),
    (30, 40, -25.0),
    (40, 40, 0.0),
])
def test_percent_change(current, previous, expected):
    assert percent_change(current, previous) == pytest.approx(expected)


def test_average_or_zero():
    assert average_or_zero([]) == 0
    assert average_or_zero([10, 20, 30]) == 20


def test_format_minutes():
    assert format_minutes(0) == "00:00:00"
    assert format_minutes(2.5) == "00:02:30"
    assert format_minutes(125) == "02:05:00"


def test_period_metrics_average_only_timed_visits():
    visits = [
        {"status": "completed", "waitingTime": 10, "servingTime": 4},
        {"status": "completed", "waitingTime": 20, "servingTime": 6},
        {"status": "waiting"},
    ]

    metrics = PeriodMetrics.from_visits(visits)

    assert metrics.customers == 3
    assert metrics.avg_wait_time == 15
    assert metrics.avg_service_time == 5


def test_compare_rounds_averages_and_reports_change():
    current = PeriodMetrics(customers=30, avg_wait_time=12.6, avg_service_time=5)
    previous = PeriodMetrics(customers=40, avg_wait_time=0, avg_service_time=10)

    cards = compare(current, previous)

    assert cards["customers"].value == 30
    assert cards["customers"].change_percent == pytest.approx(-25)
    assert cards["avg_wait_time"].value == 13
    assert cards["avg_wait_time"].change_percent == 100
    assert cards["avg_service_time"].change_percent == pytest.approx(-50)

    halves = compare(PeriodMetrics(avg_wait_time=2.5, avg_service_time=0.5), PeriodMetrics())
    assert halves["avg_wait_time"].value == 3
    assert halves["avg_service_time"].value == 1


def test_team_performance_counts_completed_visits_only():
    tellers = [{"_id": "t1", "name": "Amina"}, {"_id": "t2", "name": "Brian"}]
    visits = [
        {"teller": "t1", "status": "completed", "servingTime": 10, "waitingTime": 4},
        {"teller": "t1", "status": "completed", "servingTime": 20, "waitingTime": 8},
        {"teller": "t1", "status": "serving"},
        {"teller": "gone", "status": "completed", "servingTime": 5},
    ]

    rows = team_performance(tellers, visits)

    amina, brian = rows
    assert amina.visitors_served == 2
    assert amina.total_service_time == "00:30:00"
    assert amina.avg_service_time == "00:15:00"
    assert amina.avg_waiting_time == "00:06:00"
    assert brian.visitors_served == 0
    assert brian.avg_service_time == "00:00:00"
