"""
Teller management service.
"""

from typing import List, Optional

from ..analytics import UNKNOWN_SERVICE
from ..exceptions import DuplicateNameError
from ..models.base import NAME_FIELDS, STATUS_FIELD
from ..models.log import LogLevel
from ..models.teller import Teller, TellerCreate, TellerView
from .catalog_service import name_taken
from .log_service import AuditLogService

UNKNOWN_DESK = "Unknown Desk"


class TellerService:
    """Teller records with their desk and service assignments."""

    def __init__(self, store, audit: Optional[AuditLogService] = None):
        self.store = store
        self.audit = audit or AuditLogService(store)

    async def _views(self, docs: List[dict]) -> List[TellerView]:
        # One lookup per collection for the whole page
        desks = await self.store.get_many("desks", {doc.get("desk") for doc in docs if doc.get("desk")})
        services = await self.store.get_many(
            "services",
            {service_id for doc in docs for service_id in doc.get("services", [])}
        )

        views = []
        for doc in docs:
            desk = desks.get(doc.get("desk"))
            views.append(TellerView(
                **doc,
                desk_name=desk["name"] if desk else UNKNOWN_DESK,
                service_names=[
                    services[service_id].get(NAME_FIELDS["services"]) or UNKNOWN_SERVICE
                    if service_id in services else UNKNOWN_SERVICE
                    for service_id in doc.get("services", [])
                ]
            ))
        return views

    async def list_all(self, enabled: Optional[bool] = None) -> List[TellerView]:
        query = {} if enabled is None else {STATUS_FIELD: enabled}
        docs = await self.store.find("tellers", query, sort=[("name", 1)])
        return await self._views(docs)

    async def get(self, teller_id: str) -> Optional[TellerView]:
        doc = await self.store.get("tellers", teller_id)
        if not doc:
            return None
        views = await self._views([doc])
        return views[0]

    async def _validate(self, data: TellerCreate, exclude_id: Optional[str] = None):
        existing = await self.store.find("tellers")
        if name_taken(existing, data.name, exclude_id):
            raise DuplicateNameError("Teller", data.name)

        if not await self.store.get("desks", data.desk):
            raise ValueError("Desk not found")

        known = await self.store.get_many("services", data.services)
        unknown = [service_id for service_id in data.services if service_id not in known]
        if unknown:
            raise ValueError(f"Unknown services: {', '.join(unknown)}")

    async def create(self, data: TellerCreate, actor: Optional[str] = None) -> Teller:
        await self._validate(data)

        doc = await self.store.insert("tellers", {
            "name": data.name.strip(),
            "email": data.email.lower(),
            "desk": data.desk,
            "services": list(dict.fromkeys(data.services)),
            STATUS_FIELD: True,
            "image": None
        })
        # Counter clients keep their running serving count here, keyed by teller id
        await self.store.upsert("tempQueue", doc["_id"], {"servingCount": 0})
        await self.audit.record(f'Teller "{doc["name"]}" added', actor)
        return Teller(**doc)

    async def update(self, teller_id: str, data: TellerCreate, actor: Optional[str] = None) -> Optional[Teller]:
        if not await self.store.get("tellers", teller_id):
            return None
        await self._validate(data, exclude_id=teller_id)

        # The service list is replaced as a whole
        doc = await self.store.update("tellers", teller_id, {
            "name": data.name.strip(),
            "email": data.email.lower(),
            "desk": data.desk,
            "services": list(dict.fromkeys(data.services))
        })
        await self.audit.record(f'Teller "{doc["name"]}" updated', actor)
        return Teller(**doc)

    async def set_enabled(self, teller_id: str, enabled: bool, actor: Optional[str] = None) -> Optional[Teller]:
        doc = await self.store.update("tellers", teller_id, {STATUS_FIELD: enabled})
        if not doc:
            return None

        state = "enabled" if enabled else "disabled"
        await self.audit.record(
            f'Teller "{doc["name"]}" status changed to {state}',
            actor,
            LogLevel.INFO if enabled else LogLevel.WARNING
        )
        return Teller(**doc)

    async def set_image(self, teller_id: str, url: str) -> Optional[Teller]:
        doc = await self.store.update("tellers", teller_id, {"image": url})
        return Teller(**doc) if doc else None
