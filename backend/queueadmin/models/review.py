"""
Customer review models.
"""

from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

from .base import DocumentModel


class Review(DocumentModel):
    time: Optional[datetime] = None
    type: str = "positive"
    comment: Optional[str] = None
    rating: Optional[int] = None


class ActivityFeed(BaseModel):
    """Recent reviews with positive/negative tallies."""
    reviews: List[Review] = []
    positive: int = 0
    negative: int = 0
    total: int = 0
