"""Pydantic models for the queue admin dashboard."""

from .base import NAME_FIELDS, STATUS_FIELD, DocumentModel, StatusUpdate
from .user import AdminProfile, AdminInDB, ProfileUpdate, LoginRequest, PasswordChange, Token, TokenData
from .queue import Visit, VisitStatus, VisitRow, LiveVisit, LivePanel
from .service import Service, ServiceCreate
from .desk import Desk, DeskCreate
from .teller import Teller, TellerCreate, TellerView
from .schedule import OpeningHours, OpeningHoursUpdate, HoursRange, WEEK_DAYS
from .log import LogEntry, LogLevel
from .review import Review, ActivityFeed
from .report import MetricCards, VisitChart, TeamReport, TodayOverview

__all__ = [
    # Base
    "NAME_FIELDS", "STATUS_FIELD", "DocumentModel", "StatusUpdate",
    # Admin
    "AdminProfile", "AdminInDB", "ProfileUpdate", "LoginRequest", "PasswordChange", "Token", "TokenData",
    # Queue
    "Visit", "VisitStatus", "VisitRow", "LiveVisit", "LivePanel",
    # Setup
    "Service", "ServiceCreate", "Desk", "DeskCreate", "Teller", "TellerCreate", "TellerView",
    "OpeningHours", "OpeningHoursUpdate", "HoursRange", "WEEK_DAYS",
    # Audit and activity
    "LogEntry", "LogLevel", "Review", "ActivityFeed",
    # Reports
    "MetricCards", "VisitChart", "TeamReport", "TodayOverview"
]
