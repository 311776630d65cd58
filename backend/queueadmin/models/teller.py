"""
Teller models.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import datetime

from .base import STATUS_FIELD, DocumentModel


class TellerCreate(BaseModel):
    """Create or edit a teller."""
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    desk: str
    services: List[str] = []


class Teller(DocumentModel):
    name: str
    email: Optional[str] = None
    desk: Optional[str] = None
    services: List[str] = []
    enabled: bool = Field(True, alias=STATUS_FIELD)
    image: Optional[str] = None
    created_on: Optional[datetime] = None


class TellerView(Teller):
    """Teller with its desk and services resolved to names."""
    desk_name: str
    service_names: List[str] = []
