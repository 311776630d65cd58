"""
Shared router dependencies: the document store, authentication and error mapping.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from ..database import DocumentStore, get_database
from ..exceptions import DuplicateNameError
from ..models.user import AdminProfile
from ..services.auth_service import AuthService

security = HTTPBearer()


async def get_store() -> DocumentStore:
    """Data-access client for the request."""
    return DocumentStore(await get_database())


async def get_current_admin(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    store: DocumentStore = Depends(get_store)
) -> AdminProfile:
    """Get current authenticated admin from JWT token."""
    admin = await AuthService(store).get_current_admin(credentials.credentials)

    if not admin:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"}
        )

    return admin


def duplicate_name(error: DuplicateNameError) -> HTTPException:
    """409 carrying the form field the message belongs to."""
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail={"field": error.field, "message": str(error)}
    )


def bad_request(error: ValueError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=str(error)
    )


def not_found(kind: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"{kind} not found"
    )
