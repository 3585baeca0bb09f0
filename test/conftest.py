"""
Configuración global de pytest para AccountHub.

MongoDB se sustituye por una colección en memoria que imita lo que usa el
repositorio (insert_one, find_one, find().to_list, find_one_and_update,
create_index) y respeta los índices únicos igual que el servidor.
"""

from __future__ import annotations

import copy

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from app import create_app
from config import Settings
from context import AppContext


class FakeInsertResult:
    def __init__(self, inserted_id):
        self.inserted_id = inserted_id


class FakeCursor:
    def __init__(self, docs):
        self._docs = docs

    async def to_list(self, length=None):
        docs = [copy.deepcopy(d) for d in self._docs]
        return docs if length is None else docs[:length]


class FakeCollection:
    def __init__(self, name: str):
        self.name = name
        self.docs: list = []
        self.unique_fields: set = set()

    def _matches(self, doc, filt) -> bool:
        return all(doc.get(k) == v for k, v in (filt or {}).items())

    def _check_unique(self, doc, exclude_id=None):
        for field in self.unique_fields:
            if field not in doc:
                continue
            for other in self.docs:
                if other["_id"] != exclude_id and other.get(field) == doc[field]:
                    raise DuplicateKeyError(
                        f"E11000 duplicate key error collection: {self.name} "
                        f"index: {field}_unique dup key: {{ {field}: {doc[field]!r} }}",
                        11000,
                    )

    async def create_index(self, keys, unique=False, name=None):
        field = keys[0][0] if isinstance(keys, list) else keys
        if unique:
            self.unique_fields.add(field)
        return name or f"{field}_1"

    async def insert_one(self, doc):
        self._check_unique(doc)
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return FakeInsertResult(doc["_id"])

    async def find_one(self, filt=None):
        for doc in self.docs:
            if self._matches(doc, filt):
                return copy.deepcopy(doc)
        return None

    def find(self, filt=None):
        return FakeCursor([d for d in self.docs if self._matches(d, filt)])

    async def find_one_and_update(self, filt, update, return_document=ReturnDocument.BEFORE):
        for doc in self.docs:
            if self._matches(doc, filt):
                before = copy.deepcopy(doc)
                after = {**doc, **update.get("$set", {})}
                self._check_unique(after, exclude_id=doc["_id"])
                doc.update(update.get("$set", {}))
                return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before
        return None


class FakeDB:
    def __init__(self, name: str = "accounthub_test"):
        self.name = name
        self._collections: dict = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self._collections:
            self._collections[name] = FakeCollection(name)
        return self._collections[name]


@pytest.fixture
def fake_db():
    return FakeDB()


@pytest.fixture
def settings():
    return Settings(environ={"MONGO_URI": "mongodb://localhost:27017/accounthub_test"})


@pytest.fixture
def ctx(settings, fake_db):
    return AppContext.build(settings, fake_db)


@pytest.fixture
def app(ctx):
    return create_app(ctx)


@pytest.fixture
def client(app):
    return TestClient(app)
