"""Services package for the queue admin dashboard."""

from .auth_service import AuthService
from .log_service import AuditLogService
from .catalog_service import DeskService, ServiceCatalogService
from .teller_service import TellerService
from .schedule_service import ScheduleService
from .visit_service import VisitService
from .report_service import ReportService, ChartMetric
from .live_service import LiveStatusProjector, NameResolver, elapsed_minutes
from .activity_service import ActivityService
from .profile_service import ProfileService
from .storage_service import StorageService

__all__ = [
    "AuthService",
    "AuditLogService",
    "DeskService",
    "ServiceCatalogService",
    "TellerService",
    "ScheduleService",
    "VisitService",
    "ReportService",
    "ChartMetric",
    "LiveStatusProjector",
    "NameResolver",
    "elapsed_minutes",
    "ActivityService",
    "ProfileService",
    "StorageService"
]
