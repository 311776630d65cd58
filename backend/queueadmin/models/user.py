"""
Admin account and authentication models.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

from .base import DocumentModel


class AdminProfile(DocumentModel):
    """Admin response model (no password)."""
    email: EmailStr
    name: str = ""
    phone: Optional[str] = None
    address: Optional[str] = None
    image: Optional[str] = None
    created_on: Optional[datetime] = None


class AdminInDB(AdminProfile):
    """Admin as stored in the database."""
    hashed_password: str


class ProfileUpdate(BaseModel):
    """Editable profile fields; omitted fields are left unchanged."""
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = Field(None, max_length=200)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class PasswordChange(BaseModel):
    """Change password after re-entering the current one."""
    current_password: str
    new_password: str = Field(..., min_length=6, max_length=100)


class Token(BaseModel):
    """JWT token response."""
    access_token: str
    token_type: str = "bearer"
    admin: AdminProfile


class TokenData(BaseModel):
    """JWT token payload data."""
    admin_id: Optional[str] = None
    email: Optional[str] = None
