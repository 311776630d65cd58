"""
Authentication API routes.
"""

from fastapi import APIRouter, HTTPException, status, Depends

from ..database import DocumentStore
from ..exceptions import InvalidCredentialsError
from ..models.user import AdminProfile, LoginRequest, PasswordChange, Token
from ..services.auth_service import AuthService
from .dependencies import get_current_admin, get_store, bad_request

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=Token, response_model_by_alias=False)
async def login(credentials: LoginRequest, store: DocumentStore = Depends(get_store)):
    """Sign in and get an access token."""
    token = await AuthService(store).login(credentials.email, credentials.password)

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"}
        )

    return token


@router.get("/me", response_model=AdminProfile, response_model_by_alias=False)
async def get_current_admin_info(current_admin: AdminProfile = Depends(get_current_admin)):
    """Get the signed-in admin."""
    return current_admin


@router.post("/logout")
async def logout(
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    """Sign out (client should discard token)."""
    await AuthService(store).logout(current_admin)
    return {"message": "Logged out successfully"}


@router.post("/password")
async def change_password(
    request: PasswordChange,
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    """Change password; the current password must be re-entered."""
    try:
        await AuthService(store).change_password(current_admin, request.current_password, request.new_password)
    except InvalidCredentialsError as e:
        raise bad_request(e)
    return {"message": "Password updated successfully"}
