"""
Desks and services: named records that can be renamed and switched on or off.
"""

from typing import List, Optional, Type

from ..exceptions import DuplicateNameError
from ..models.base import NAME_FIELDS, STATUS_FIELD
from ..models.desk import Desk
from ..models.log import LogLevel
from ..models.service import Service
from .log_service import AuditLogService


def name_taken(
    existing: List[dict],
    name: str,
    exclude_id: Optional[str] = None,
    field: str = "name"
) -> bool:
    """Case-insensitive name clash, ignoring the record being edited."""
    wanted = name.strip().lower()
    return any(
        (doc.get(field) or "").strip().lower() == wanted and doc["_id"] != exclude_id
        for doc in existing
    )


class CatalogService:
    """Create, rename and enable/disable records of one collection."""

    collection: str = ""
    kind: str = ""
    model: Type = dict

    def __init__(self, store, audit: Optional[AuditLogService] = None):
        self.store = store
        self.audit = audit or AuditLogService(store)

    @property
    def name_field(self) -> str:
        return NAME_FIELDS[self.collection]

    async def list_all(self, enabled: Optional[bool] = None) -> list:
        query = {} if enabled is None else {STATUS_FIELD: enabled}
        docs = await self.store.find(self.collection, query, sort=[(self.name_field, 1)])
        return [self.model(**doc) for doc in docs]

    async def get(self, doc_id: str):
        doc = await self.store.get(self.collection, doc_id)
        return self.model(**doc) if doc else None

    async def _check_name(self, name: str, exclude_id: Optional[str] = None):
        existing = await self.store.find(self.collection)
        if name_taken(existing, name, exclude_id, self.name_field):
            raise DuplicateNameError(self.kind, name)

    async def create(self, name: str, actor: Optional[str] = None):
        name = name.strip()
        await self._check_name(name)

        doc = await self.store.insert(self.collection, {self.name_field: name, STATUS_FIELD: True})
        await self.audit.record(f'{self.kind} "{name}" created', actor)
        return self.model(**doc)

    async def rename(self, doc_id: str, name: str, actor: Optional[str] = None):
        current = await self.store.get(self.collection, doc_id)
        if not current:
            return None

        name = name.strip()
        if name == current.get(self.name_field):
            return self.model(**current)
        await self._check_name(name, exclude_id=doc_id)

        doc = await self.store.update(self.collection, doc_id, {self.name_field: name})
        await self.audit.record(f'{self.kind} "{current.get(self.name_field)}" renamed to "{name}"', actor)
        return self.model(**doc)

    async def set_enabled(self, doc_id: str, enabled: bool, actor: Optional[str] = None):
        doc = await self.store.update(self.collection, doc_id, {STATUS_FIELD: enabled})
        if not doc:
            return None

        state = "enabled" if enabled else "disabled"
        await self.audit.record(
            f'{self.kind} "{doc.get(self.name_field)}" status changed to {state}',
            actor,
            LogLevel.INFO if enabled else LogLevel.WARNING
        )
        return self.model(**doc)


class DeskService(CatalogService):
    collection = "desks"
    kind = "Desk"
    model = Desk


class ServiceCatalogService(CatalogService):
    collection = "services"
    kind = "Service"
    model = Service
