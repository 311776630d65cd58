"""
Teller management API routes.
"""

from typing import List, Optional
from fastapi import APIRouter, status, Depends, File, Query, UploadFile

from ..database import DocumentStore
from ..exceptions import DuplicateNameError
from ..models.base import StatusUpdate
from ..models.teller import Teller, TellerCreate, TellerView
from ..models.user import AdminProfile
from ..services.storage_service import StorageService
from ..services.teller_service import TellerService
from .dependencies import get_current_admin, get_store, duplicate_name, bad_request, not_found

router = APIRouter(prefix="/tellers", tags=["Tellers"])


@router.get("", response_model=List[TellerView], response_model_by_alias=False)
async def list_tellers(
    enabled: Optional[bool] = Query(None),
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    """Tellers with desk and service names."""
    return await TellerService(store).list_all(enabled)


@router.get("/{teller_id}", response_model=TellerView, response_model_by_alias=False)
async def get_teller(
    teller_id: str,
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    teller = await TellerService(store).get(teller_id)
    if not teller:
        raise not_found("Teller")
    return teller


@router.post("", response_model=Teller, response_model_by_alias=False, status_code=status.HTTP_201_CREATED)
async def create_teller(
    data: TellerCreate,
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    """Add a teller assigned to a desk and a set of services."""
    try:
        return await TellerService(store).create(data, current_admin.email)
    except DuplicateNameError as e:
        raise duplicate_name(e)
    except ValueError as e:
        raise bad_request(e)


@router.put("/{teller_id}", response_model=Teller, response_model_by_alias=False)
async def update_teller(
    teller_id: str,
    data: TellerCreate,
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    try:
        teller = await TellerService(store).update(teller_id, data, current_admin.email)
    except DuplicateNameError as e:
        raise duplicate_name(e)
    except ValueError as e:
        raise bad_request(e)
    if not teller:
        raise not_found("Teller")
    return teller


@router.patch("/{teller_id}/status", response_model=Teller, response_model_by_alias=False)
async def set_teller_status(
    teller_id: str,
    data: StatusUpdate,
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    teller = await TellerService(store).set_enabled(teller_id, data.enabled, current_admin.email)
    if not teller:
        raise not_found("Teller")
    return teller


@router.post("/{teller_id}/image", response_model=Teller, response_model_by_alias=False)
async def upload_teller_image(
    teller_id: str,
    file: UploadFile = File(...),
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    """Upload the teller's photo."""
    tellers = TellerService(store)
    if not await tellers.get(teller_id):
        raise not_found("Teller")

    content = await file.read()
    try:
        url = StorageService().save_image(content, file.filename, folder="teller-images", name=teller_id)
    except ValueError as e:
        raise bad_request(e)
    return await tellers.set_image(teller_id, url)
