"""
Desk and service management API routes.

Both collections share the same create/rename/enable operations, so one
factory builds a router per catalog.
"""

from typing import List, Optional, Type
from fastapi import APIRouter, status, Depends, Query

from ..database import DocumentStore
from ..exceptions import DuplicateNameError
from ..models.base import StatusUpdate
from ..models.desk import Desk, DeskCreate
from ..models.service import Service, ServiceCreate
from ..models.user import AdminProfile
from ..services.catalog_service import CatalogService, DeskService, ServiceCatalogService
from .dependencies import get_current_admin, get_store, duplicate_name, not_found


def build_catalog_router(
    prefix: str,
    tag: str,
    service_class: Type[CatalogService],
    model: Type,
    create_model: Type
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])
    kind = service_class.kind

    @router.get("", response_model=List[model], response_model_by_alias=False)
    async def list_records(
        enabled: Optional[bool] = Query(None, description="Only enabled or only disabled records"),
        current_admin: AdminProfile = Depends(get_current_admin),
        store: DocumentStore = Depends(get_store)
    ):
        return await service_class(store).list_all(enabled)

    @router.get("/{record_id}", response_model=model, response_model_by_alias=False)
    async def get_record(
        record_id: str,
        current_admin: AdminProfile = Depends(get_current_admin),
        store: DocumentStore = Depends(get_store)
    ):
        record = await service_class(store).get(record_id)
        if not record:
            raise not_found(kind)
        return record

    @router.post("", response_model=model, response_model_by_alias=False,
                 status_code=status.HTTP_201_CREATED)
    async def create_record(
        data: create_model,
        current_admin: AdminProfile = Depends(get_current_admin),
        store: DocumentStore = Depends(get_store)
    ):
        try:
            return await service_class(store).create(data.name, current_admin.email)
        except DuplicateNameError as e:
            raise duplicate_name(e)

    @router.put("/{record_id}", response_model=model, response_model_by_alias=False)
    async def rename_record(
        record_id: str,
        data: create_model,
        current_admin: AdminProfile = Depends(get_current_admin),
        store: DocumentStore = Depends(get_store)
    ):
        try:
            record = await service_class(store).rename(record_id, data.name, current_admin.email)
        except DuplicateNameError as e:
            raise duplicate_name(e)
        if not record:
            raise not_found(kind)
        return record

    @router.patch("/{record_id}/status", response_model=model, response_model_by_alias=False)
    async def set_record_status(
        record_id: str,
        data: StatusUpdate,
        current_admin: AdminProfile = Depends(get_current_admin),
        store: DocumentStore = Depends(get_store)
    ):
        record = await service_class(store).set_enabled(record_id, data.enabled, current_admin.email)
        if not record:
            raise not_found(kind)
        return record

    return router


desks_router = build_catalog_router("/desks", "Desks", DeskService, Desk, DeskCreate)
services_router = build_catalog_router("/services", "Services", ServiceCatalogService, Service, ServiceCreate)
