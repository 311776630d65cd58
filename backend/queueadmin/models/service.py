"""
Service (request category) models.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from .base import NAME_FIELDS, STATUS_FIELD, DocumentModel


class ServiceCreate(BaseModel):
    """Create or rename a service."""
    name: str = Field(..., min_length=1, max_length=100)


class Service(DocumentModel):
    name: str = Field(..., alias=NAME_FIELDS["services"])
    enabled: bool = Field(True, alias=STATUS_FIELD)
    created_on: Optional[datetime] = None
