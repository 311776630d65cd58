"""
Report response models.
"""

from pydantic import BaseModel
from typing import Dict, List
from datetime import datetime

from ..analytics import Bucket, BucketSummary, BucketUnit, MetricChange, TellerPerformance
from .queue import LiveVisit, VisitRow


class MetricCards(BaseModel):
    """Customers, average wait and average service time against the previous period."""
    window_start: datetime
    window_end: datetime
    previous_start: datetime
    previous_end: datetime
    customers: MetricChange
    avg_wait_time: MetricChange
    avg_service_time: MetricChange


class VisitChart(BaseModel):
    """Visits per bucket and service."""
    unit: BucketUnit
    window_start: datetime
    window_end: datetime
    categories: List[str] = []
    buckets: List[Bucket] = []
    summary: BucketSummary


class TeamReport(BaseModel):
    window_start: datetime
    window_end: datetime
    tellers: List[TellerPerformance] = []


class TodayOverview(BaseModel):
    """Today's served customers, sign-ins and teller occupancy."""
    served_today: int = 0
    total_sign_ins: int = 0
    service_counts: Dict[str, int] = {}
    served: List[VisitRow] = []
    busy_tellers: List[LiveVisit] = []
    total_desks: int = 0
    desks_available: int = 0
