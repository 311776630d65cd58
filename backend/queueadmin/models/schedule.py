"""
Opening hours models.
"""

from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel
from typing import Optional

from .base import STATUS_FIELD

WEEK_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

DEFAULT_START = "08:00"
DEFAULT_END = "16:00"

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class HoursRange(BaseModel):
    start_time: str = Field(DEFAULT_START, pattern=TIME_PATTERN)
    end_time: str = Field(DEFAULT_END, pattern=TIME_PATTERN)

    @model_validator(mode="after")
    def check_order(self):
        # Zero-padded HH:MM strings compare in clock order
        if self.end_time <= self.start_time:
            raise ValueError("Closing time must be after opening time")
        return self


class OpeningHoursUpdate(HoursRange):
    """Save one weekday."""
    enabled: bool


class OpeningHours(BaseModel):
    """One weekday's opening hours."""
    id: Optional[str] = Field(None, alias="_id")
    name: str
    enabled: bool = Field(False, alias=STATUS_FIELD)
    start_time: str = DEFAULT_START
    end_time: str = DEFAULT_END

    class Config:
        populate_by_name = True
        alias_generator = to_camel
