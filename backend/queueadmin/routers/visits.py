"""
Visit table and today's overview API routes.
"""

from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from ..database import DocumentStore
from ..models.queue import VisitRow
from ..models.report import TodayOverview
from ..models.user import AdminProfile
from ..services.visit_service import VisitService
from .dependencies import get_current_admin, get_store, bad_request

router = APIRouter(tags=["Visits"])


@router.get("/visits", response_model=List[VisitRow], response_model_by_alias=False)
async def list_visits(
    day: Optional[date] = Query(None, description="Defaults to today"),
    sort: str = Query("joinedOn"),
    order: str = Query("desc", pattern="^(asc|desc)$"),
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    """Visits that joined the queue on one day."""
    try:
        return await VisitService(store).table_for_day(
            day or store.now().date(),
            sort=sort,
            descending=order == "desc"
        )
    except ValueError as e:
        raise bad_request(e)


@router.get("/overview/today", response_model=TodayOverview, response_model_by_alias=False)
async def today_overview(
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    """Served customers, sign-ins, busy tellers and free desks."""
    return await VisitService(store).today_overview()
