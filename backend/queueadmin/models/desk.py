"""
Desk models.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from .base import STATUS_FIELD, DocumentModel


class DeskCreate(BaseModel):
    """Create or rename a desk."""
    name: str = Field(..., min_length=1, max_length=100)


class Desk(DocumentModel):
    name: str
    enabled: bool = Field(True, alias=STATUS_FIELD)
    created_on: Optional[datetime] = None
