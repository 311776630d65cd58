"""Routers package for the queue admin API."""

from .auth import router as auth_router
from .profile import router as profile_router
from .catalog import desks_router, services_router
from .tellers import router as tellers_router
from .schedule import router as schedule_router
from .logs import router as logs_router
from .visits import router as visits_router
from .activity import router as activity_router
from .reports import router as reports_router
from .live import router as live_router

__all__ = [
    "auth_router",
    "profile_router",
    "desks_router",
    "services_router",
    "tellers_router",
    "schedule_router",
    "logs_router",
    "visits_router",
    "activity_router",
    "reports_router",
    "live_router"
]
