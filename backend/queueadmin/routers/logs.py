"""
Audit log API routes.
"""

from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from ..database import DocumentStore
from ..models.log import LogEntry
from ..models.user import AdminProfile
from ..services.log_service import AuditLogService
from .dependencies import get_current_admin, get_store, bad_request

router = APIRouter(prefix="/logs", tags=["Logs"])


@router.get("", response_model=List[LogEntry], response_model_by_alias=False)
async def list_logs(
    day: Optional[date] = Query(None, description="Defaults to today"),
    sort: str = Query("timestamp"),
    order: str = Query("desc", pattern="^(asc|desc)$"),
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    """Log entries of one day."""
    try:
        return await AuditLogService(store).list_for_day(
            day or store.now().date(),
            sort=sort,
            descending=order == "desc"
        )
    except ValueError as e:
        raise bad_request(e)
