"""
Shared fixtures: an in-memory document store and an authenticated API client.
"""

import asyncio
import os
import tempfile
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest
from bson import ObjectId

# Uploads from the tests go to a scratch directory
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="queueadmin-uploads-"))

UTC = ZoneInfo("UTC")

_OPERATORS = {
    "$gte": lambda actual, expected: actual is not None and actual >= expected,
    "$gt": lambda actual, expected: actual is not None and actual > expected,
    "$lte": lambda actual, expected: actual is not None and actual <= expected,
    "$lt": lambda actual, expected: actual is not None and actual < expected,
    "$in": lambda actual, expected: actual in expected,
}


def _matches(doc, query):
    for field, condition in (query or {}).items():
        actual = doc.get(field)
        if isinstance(condition, dict):
            if not all(_OPERATORS[op](actual, expected) for op, expected in condition.items()):
                return False
        elif actual != condition:
            return False
    return True


class InMemoryStore:
    """Stands in for ``DocumentStore``; documents are kept as plain dicts."""

    def __init__(self, now=None, tz=UTC):
        self.tz = tz
        self.collections = {}
        self.current_time = now or datetime(2024, 3, 6, 12, 0, tzinfo=tz)
        self.calls = []
        self._watchers = []

    def now(self):
        return self.current_time

    def _docs(self, collection):
        return self.collections.setdefault(collection, [])

    def _notify(self, collection):
        for watched, changes in self._watchers:
            if watched == collection:
                changes.put_nowait(collection)

    def seed(self, collection, **fields):
        """Insert a document without stamping it; returns its id."""
        doc = {"_id": str(ObjectId()), **fields}
        self._docs(collection).append(doc)
        return doc["_id"]

    async def find(self, collection, query=None, sort=None, limit=None):
        self.calls.append(("find", collection))
        docs = [dict(doc) for doc in self._docs(collection) if _matches(doc, query)]
        for field, direction in reversed(list(sort or [])):
            present = [doc for doc in docs if doc.get(field) is not None]
            missing = [doc for doc in docs if doc.get(field) is None]
            present.sort(key=lambda doc: doc[field], reverse=direction < 0)
            # Missing values sort first ascending, last descending
            docs = missing + present if direction > 0 else present + missing
        return docs[:limit] if limit else docs

    async def find_one(self, collection, query):
        docs = await self.find(collection, query)
        return docs[0] if docs else None

    async def get(self, collection, doc_id):
        return await self.find_one(collection, {"_id": doc_id})

    async def get_many(self, collection, doc_ids):
        self.calls.append(("get_many", collection))
        wanted = set(doc_ids)
        return {doc["_id"]: dict(doc) for doc in self._docs(collection) if doc["_id"] in wanted}

    async def count(self, collection, query=None):
        return len(await self.find(collection, query))

    async def insert(self, collection, doc, timestamp_field="createdOn"):
        doc = {"_id": str(ObjectId()), **doc}
        if timestamp_field:
            doc[timestamp_field] = self.now()
        self._docs(collection).append(doc)
        self._notify(collection)
        return dict(doc)

    async def update(self, collection, doc_id, fields):
        for doc in self._docs(collection):
            if doc["_id"] == doc_id:
                doc.update(fields)
                self._notify(collection)
                return dict(doc)
        return None

    async def upsert(self, collection, doc_id, fields):
        if await self.update(collection, doc_id, fields) is None:
            self._docs(collection).append({"_id": doc_id, **fields})
            self._notify(collection)

    async def watch(self, collection, query=None, sort=None, limit=None):
        changes = asyncio.Queue()
        watcher = (collection, changes)
        self._watchers.append(watcher)
        try:
            yield await self.find(collection, query, sort, limit)
            while True:
                await changes.get()
                yield await self.find(collection, query, sort, limit)
        finally:
            self._watchers.remove(watcher)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def admin(store):
    """An admin account; the stored hash is never checked by token-auth tests."""
    store.seed("admins", email="admin@example.com", name="Admin", hashedPassword="x")
    return store.collections["admins"][0]


@pytest.fixture
def client(store):
    from fastapi.testclient import TestClient

    from queueadmin.main import app
    from queueadmin.routers.dependencies import get_store

    async def override_store():
        return store

    app.dependency_overrides[get_store] = override_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def token(admin):
    from queueadmin.services.auth_service import AuthService

    return AuthService.create_access_token({"sub": admin["_id"], "email": admin["email"]})


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}
