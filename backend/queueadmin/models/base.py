"""
Shared base for stored documents.
"""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class DocumentModel(BaseModel):
    """A stored document: camelCase in the database, snake_case in Python."""
    id: str = Field(..., alias="_id")

    class Config:
        populate_by_name = True
        alias_generator = to_camel


class StatusUpdate(BaseModel):
    """Enable or disable a desk, service or teller."""
    enabled: bool


# Stored field holding each collection's display name
NAME_FIELDS = {
    "services": "service",
    "desks": "name",
    "tellers": "name",
}

# Stored on/off flag of services, desks, tellers and opening-hours days
STATUS_FIELD = "status"
