"""
Report API routes: metric cards, visit charts and team performance.
"""

from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from ..analytics import TimeWindow
from ..database import DocumentStore
from ..models.report import MetricCards, TeamReport, VisitChart
from ..models.user import AdminProfile
from ..services.report_service import ChartMetric, ReportService
from .dependencies import get_current_admin, get_store, bad_request

router = APIRouter(prefix="/reports", tags=["Reports"])


def _current_week(store: DocumentStore, year: Optional[int], week: Optional[int]):
    iso_year, iso_week, _ = store.now().isocalendar()
    return year or iso_year, week or iso_week


def _current_month(store: DocumentStore, year: Optional[int], month: Optional[int]):
    today = store.now()
    return year or today.year, month or today.month


def _day_window(store: DocumentStore, day: Optional[date]) -> TimeWindow:
    return TimeWindow.for_day(day or store.now().date(), store.tz)


def _week_window(store: DocumentStore, year: Optional[int], week: Optional[int]) -> TimeWindow:
    try:
        return TimeWindow.for_week(*_current_week(store, year, week), store.tz)
    except ValueError as e:
        raise bad_request(e)


def _month_window(store: DocumentStore, year: Optional[int], month: Optional[int]) -> TimeWindow:
    return TimeWindow.for_month(*_current_month(store, year, month), store.tz)


def _range_window(store: DocumentStore, start: date, end: Optional[date]) -> TimeWindow:
    try:
        return TimeWindow.for_range(start, end or store.now().date(), store.tz)
    except ValueError as e:
        raise bad_request(e)


# Metric cards

@router.get("/summary/day", response_model=MetricCards)
async def summary_day(
    day: Optional[date] = Query(None, description="Defaults to today"),
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    """One day against the day before."""
    return await ReportService(store).metric_cards(_day_window(store, day))


@router.get("/summary/week", response_model=MetricCards)
async def summary_week(
    year: Optional[int] = Query(None),
    week: Optional[int] = Query(None, ge=1, le=53),
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    """One ISO week against the week before."""
    return await ReportService(store).metric_cards(_week_window(store, year, week))


@router.get("/summary/month", response_model=MetricCards)
async def summary_month(
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None, ge=1, le=12),
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    return await ReportService(store).metric_cards(_month_window(store, year, month))


@router.get("/summary/range", response_model=MetricCards)
async def summary_range(
    start: date,
    end: Optional[date] = Query(None, description="Defaults to today"),
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    """A date range against the equally long range before it."""
    return await ReportService(store).metric_cards(_range_window(store, start, end))


# Visit charts

@router.get("/visits/hourly", response_model=VisitChart)
async def visits_hourly(
    day: Optional[date] = Query(None, description="Defaults to today"),
    services: Optional[List[str]] = Query(None, description="Service ids to chart"),
    metric: ChartMetric = Query(ChartMetric.VISITS),
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    return await ReportService(store).hourly(day or store.now().date(), services=services, metric=metric)


@router.get("/visits/daily", response_model=VisitChart)
async def visits_daily(
    year: Optional[int] = Query(None),
    week: Optional[int] = Query(None, ge=1, le=53),
    services: Optional[List[str]] = Query(None, description="Service ids to chart"),
    metric: ChartMetric = Query(ChartMetric.VISITS),
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    """Monday to Friday of one ISO week."""
    year, week = _current_week(store, year, week)
    try:
        return await ReportService(store).daily(year, week, services=services, metric=metric)
    except ValueError as e:
        raise bad_request(e)


@router.get("/visits/monthly", response_model=VisitChart)
async def visits_monthly(
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None, ge=1, le=12),
    services: Optional[List[str]] = Query(None, description="Service ids to chart"),
    metric: ChartMetric = Query(ChartMetric.VISITS),
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    year, month = _current_month(store, year, month)
    return await ReportService(store).monthly(year, month, services=services, metric=metric)


@router.get("/visits/all-time", response_model=VisitChart)
async def visits_all_time(
    start: date,
    end: Optional[date] = Query(None, description="Defaults to today"),
    services: Optional[List[str]] = Query(None, description="Service ids to chart"),
    metric: ChartMetric = Query(ChartMetric.VISITS),
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    """Every business day between ``start`` and ``end``."""
    try:
        return await ReportService(store).all_time(
            start, end or store.now().date(), services=services, metric=metric
        )
    except ValueError as e:
        raise bad_request(e)


@router.get("/visits/weekday", response_model=VisitChart)
async def visits_weekday(
    start: date,
    end: Optional[date] = Query(None, description="Defaults to today"),
    services: Optional[List[str]] = Query(None, description="Service ids to chart"),
    metric: ChartMetric = Query(ChartMetric.VISITS),
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    """Visits per weekday, Monday to Friday, over a date range."""
    try:
        return await ReportService(store).weekday_comparison(
            start, end or store.now().date(), services=services, metric=metric
        )
    except ValueError as e:
        raise bad_request(e)


# Team performance

@router.get("/team/day", response_model=TeamReport)
async def team_day(
    day: Optional[date] = Query(None, description="Defaults to today"),
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    """Visits completed on one day, per teller."""
    return await ReportService(store).team(_day_window(store, day), time_field="completedOn")


@router.get("/team/week", response_model=TeamReport)
async def team_week(
    year: Optional[int] = Query(None),
    week: Optional[int] = Query(None, ge=1, le=53),
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    return await ReportService(store).team(_week_window(store, year, week))


@router.get("/team/month", response_model=TeamReport)
async def team_month(
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None, ge=1, le=12),
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    return await ReportService(store).team(_month_window(store, year, month))


@router.get("/team/range", response_model=TeamReport)
async def team_range(
    start: date,
    end: Optional[date] = Query(None, description="Defaults to today"),
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    return await ReportService(store).team(_range_window(store, start, end))
