"""
Admin profile service.
"""

from typing import Optional

from ..models.user import AdminProfile, ProfileUpdate
from .storage_service import StorageService


class ProfileService:

    def __init__(self, store, storage: Optional[StorageService] = None):
        self.store = store
        self.storage = storage or StorageService()

    async def get(self, admin_id: str) -> Optional[AdminProfile]:
        doc = await self.store.get("admins", admin_id)
        return AdminProfile(**doc) if doc else None

    async def update(self, admin_id: str, data: ProfileUpdate) -> Optional[AdminProfile]:
        fields = data.model_dump(exclude_none=True)
        if not fields:
            return await self.get(admin_id)
        doc = await self.store.update("admins", admin_id, fields)
        return AdminProfile(**doc) if doc else None

    async def set_avatar(self, admin_id: str, content: bytes, filename: str) -> Optional[AdminProfile]:
        url = self.storage.save_image(content, filename, folder="admin_avatars", name=admin_id)
        doc = await self.store.update("admins", admin_id, {"image": url})
        return AdminProfile(**doc) if doc else None
