"""
Opening hours API routes.
"""

from typing import List
from fastapi import APIRouter, Depends

from ..database import DocumentStore
from ..models.schedule import HoursRange, OpeningHours, OpeningHoursUpdate
from ..models.user import AdminProfile
from ..services.schedule_service import ScheduleService
from .dependencies import get_current_admin, get_store, bad_request

router = APIRouter(prefix="/opening-hours", tags=["Opening Hours"])


@router.get("", response_model=List[OpeningHours], response_model_by_alias=False)
async def get_week(
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    """Monday through Sunday."""
    return await ScheduleService(store).week()


@router.put("/{day}", response_model=OpeningHours, response_model_by_alias=False)
async def save_day(
    day: str,
    data: OpeningHoursUpdate,
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    try:
        return await ScheduleService(store).save_day(day, data, current_admin.email)
    except ValueError as e:
        raise bad_request(e)


@router.post("/universal", response_model=List[OpeningHours], response_model_by_alias=False)
async def apply_universal_time(
    data: HoursRange,
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    """Same hours for every day; open/closed flags are left alone."""
    return await ScheduleService(store).apply_universal(data, current_admin.email)
