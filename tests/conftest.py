"""Test configuration and fixtures."""

import copy

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.results import InsertOneResult, UpdateResult

from app.config import Settings, get_settings
from app.database import get_db
from app.main import app


def _matches(document, query):
    for key, expected in (query or {}).items():
        actual = document.get(key)
        if isinstance(expected, dict) and "$in" in expected:
            if actual not in expected["$in"]:
                return False
        elif key not in document or actual != expected:
            return False
    return True


class FakeCursor:
    def __init__(self, documents):
        self._documents = documents

    async def to_list(self, length=None):
        if length is None:
            return list(self._documents)
        return list(self._documents[:length])


class FakeCollection:
    """In-memory stand-in for an AsyncIOMotorCollection."""

    def __init__(self):
        self.documents = []

    def find(self, query=None):
        return FakeCursor([copy.deepcopy(d) for d in self.documents if _matches(d, query)])

    async def find_one(self, query=None):
        for document in self.documents:
            if _matches(document, query):
                return copy.deepcopy(document)
        return None

    async def insert_one(self, document):
        document.setdefault("_id", ObjectId())
        self.documents.append(copy.deepcopy(document))
        return InsertOneResult(document["_id"], acknowledged=True)

    async def update_one(self, query, update):
        for document in self.documents:
            if not _matches(document, query):
                continue
            before = copy.deepcopy(document)
            for key, value in update.get("$set", {}).items():
                document[key] = value
            for key, amount in update.get("$inc", {}).items():
                document[key] = document.get(key, 0) + amount
            modified = 1 if document != before else 0
            return UpdateResult({"n": 1, "nModified": modified, "updatedExisting": True}, True)
        return UpdateResult({"n": 0, "nModified": 0, "updatedExisting": False}, True)


class FakeDatabase:
    def __init__(self):
        self._collections = {}

    def __getitem__(self, name):
        return self._collections.setdefault(name, FakeCollection())

    async def command(self, name):
        return {"ok": 1.0}


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def settings():
    return Settings(token_secret="test-secret", environment="development")


@pytest.fixture
def client(fake_db, settings):
    """TestClient wired to the in-memory database; lifespan is not entered."""
    app.dependency_overrides[get_db] = lambda: fake_db
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    """Issue a session token for `email`; the cookie lands in the client jar."""
    def _login(email):
        r = client.post("/jwt", json={"userEmail": email})
        assert r.status_code == 200
        return r
    return _login
