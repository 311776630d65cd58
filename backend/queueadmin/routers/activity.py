"""
Customer activity (reviews) API routes.
"""

from fastapi import APIRouter, Depends

from ..database import DocumentStore
from ..models.review import ActivityFeed
from ..models.user import AdminProfile
from ..services.activity_service import ActivityService
from .dependencies import get_current_admin, get_store

router = APIRouter(prefix="/activity", tags=["Activity"])


@router.get("", response_model=ActivityFeed, response_model_by_alias=False)
async def recent_activity(
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    return await ActivityService(store).recent()
