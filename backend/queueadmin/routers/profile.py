"""
Admin profile API routes.
"""

from fastapi import APIRouter, Depends, File, UploadFile

from ..database import DocumentStore
from ..models.user import AdminProfile, ProfileUpdate
from ..services.profile_service import ProfileService
from .dependencies import get_current_admin, get_store, bad_request, not_found

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("", response_model=AdminProfile, response_model_by_alias=False)
async def get_profile(current_admin: AdminProfile = Depends(get_current_admin)):
    return current_admin


@router.put("", response_model=AdminProfile, response_model_by_alias=False)
async def update_profile(
    data: ProfileUpdate,
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    """Update name, phone and address."""
    profile = await ProfileService(store).update(current_admin.id, data)
    if not profile:
        raise not_found("Profile")
    return profile


@router.post("/avatar", response_model=AdminProfile, response_model_by_alias=False)
async def upload_avatar(
    file: UploadFile = File(...),
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    """Replace the admin's avatar image."""
    content = await file.read()
    try:
        profile = await ProfileService(store).set_avatar(current_admin.id, content, file.filename)
    except ValueError as e:
        raise bad_request(e)
    if not profile:
        raise not_found("Profile")
    return profile
