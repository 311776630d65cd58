"""
Audit log models.
"""

from typing import Optional
from datetime import datetime
from enum import Enum

from .base import DocumentModel


class LogLevel(str, Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class LogEntry(DocumentModel):
    timestamp: datetime
    level: LogLevel = LogLevel.INFO
    message: str
    email: Optional[str] = None
