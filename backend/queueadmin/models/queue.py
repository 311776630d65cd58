"""
Queue visit models.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from enum import Enum

from .base import DocumentModel


class VisitStatus(str, Enum):
    """Visit status states, in the order a visit moves through them."""
    PENDING = "pending"
    WAITING = "waiting"
    SERVING = "serving"
    COMPLETED = "completed"


class Visit(DocumentModel):
    """One customer's pass through the queue, as written by the kiosk."""
    service: Optional[str] = None
    desk: Optional[str] = None
    teller: Optional[str] = None
    status: VisitStatus
    joined_on: datetime
    start_serving_time: Optional[datetime] = None
    completed_on: Optional[datetime] = None
    created_on: Optional[datetime] = None
    waiting_time: Optional[float] = Field(None, description="Minutes, set on completion")
    serving_time: Optional[float] = Field(None, description="Minutes, set on completion")
    total_time: Optional[float] = Field(None, description="Minutes, set on completion")
    queue_code: Optional[str] = None
    customer_name: Optional[str] = None


class VisitRow(Visit):
    """Visit table row."""
    teller_name: str


class LiveVisit(Visit):
    """Visit shown on a live panel."""
    service_name: str
    desk_name: str
    teller_name: str
    elapsed_minutes: int = 0


class LivePanel(BaseModel):
    """Projection of every visit currently in one status."""
    status: VisitStatus
    generated_at: datetime
    count: int = 0
    visits: List[LiveVisit] = []
