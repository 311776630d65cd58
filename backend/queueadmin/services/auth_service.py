"""
Authentication service with JWT token management.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext

from ..config import get_settings
from ..exceptions import InvalidCredentialsError
from ..models.user import AdminInDB, AdminProfile, Token, TokenData
from .log_service import AuditLogService

settings = get_settings()
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class AuthService:
    """Admin sign-in, password change and sign-out."""

    def __init__(self, store, audit: Optional[AuditLogService] = None):
        self.store = store
        self.audit = audit or AuditLogService(store)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Verify password against hash."""
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def get_password_hash(password: str) -> str:
        """Hash a password."""
        return pwd_context.hash(password)

    @staticmethod
    def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
        """Create JWT access token."""
        to_encode = data.copy()
        expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    @staticmethod
    def decode_token(token: str) -> Optional[TokenData]:
        """Decode and validate JWT token."""
        try:
            payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
            admin_id: str = payload.get("sub")
            if admin_id is None:
                return None
            return TokenData(admin_id=admin_id, email=payload.get("email"))
        except JWTError:
            return None

    async def get_admin_by_email(self, email: str) -> Optional[dict]:
        return await self.store.find_one("admins", {"email": email.lower()})

    async def create_admin(self, email: str, password: str, name: str = "") -> AdminProfile:
        """Create an admin account."""
        if await self.get_admin_by_email(email):
            raise ValueError("Admin with this email already exists")

        doc = await self.store.insert("admins", {
            "email": email.lower(),
            "name": name,
            "hashedPassword": self.get_password_hash(password)
        })
        return AdminProfile(**doc)

    async def authenticate(self, email: str, password: str) -> Optional[AdminProfile]:
        """Authenticate admin with email and password."""
        doc = await self.get_admin_by_email(email)
        if not doc:
            return None
        admin = AdminInDB(**doc)
        if not self.verify_password(password, admin.hashed_password):
            return None
        return AdminProfile(**doc)

    async def login(self, email: str, password: str) -> Optional[Token]:
        """Sign in and return an access token."""
        admin = await self.authenticate(email, password)
        if not admin:
            return None

        access_token = self.create_access_token(data={"sub": admin.id, "email": admin.email})
        await self.audit.record("User logged in", admin.email)
        return Token(access_token=access_token, admin=admin)

    async def logout(self, admin: AdminProfile) -> None:
        """Record the sign-out; the client discards its token."""
        await self.audit.record("User logged out", admin.email)

    async def change_password(self, admin: AdminProfile, current_password: str, new_password: str) -> None:
        """Re-check the current password, then store the new one."""
        if not await self.authenticate(admin.email, current_password):
            raise InvalidCredentialsError("Current password is incorrect")

        await self.store.update("admins", admin.id, {"hashedPassword": self.get_password_hash(new_password)})
        await self.audit.record("Password changed", admin.email)

    async def get_current_admin(self, token: str) -> Optional[AdminProfile]:
        """Get current admin from token."""
        token_data = self.decode_token(token)
        if not token_data:
            return None

        admin = await self.store.get("admins", token_data.admin_id)
        if not admin:
            return None
        return AdminProfile(**admin)
