"""Visit aggregation and period comparison shared by every report."""

from .aggregation import (
    HOURS,
    UNKNOWN_SERVICE,
    WEEKDAYS,
    Bucket,
    BucketSummary,
    BucketUnit,
    TimeWindow,
    WindowKind,
    aggregate,
    bucket_key,
    bucket_keys,
    relabel,
    summarize
)
from .comparison import (
    MetricChange,
    PeriodMetrics,
    TellerPerformance,
    average_or_zero,
    compare,
    format_minutes,
    percent_change,
    team_performance
)

__all__ = [
    "HOURS", "UNKNOWN_SERVICE", "WEEKDAYS", "Bucket", "BucketSummary", "BucketUnit", "TimeWindow",
    "WindowKind", "aggregate", "bucket_key", "bucket_keys", "relabel", "summarize",
    "MetricChange", "PeriodMetrics", "TellerPerformance", "average_or_zero",
    "compare", "format_minutes", "percent_change", "team_performance"
]
