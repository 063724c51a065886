"""
Readly Backend: Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

In-memory store:
    InMemoryClient/InMemoryCollection mimic the subset of pymongo's async
    collection API the services use (insert_one, find().sort().limit().to_list(),
    find_one, delete_one, create_index). They assign real bson ObjectIds and
    raise the real pymongo DuplicateKeyError for unique indexes, so the
    services run unmodified against them.

Fixture Hierarchy (function-scoped, fresh for each test):
    ├── mongo_client: InMemoryClient
    ├── database: readly.database.Database over mongo_client
    └── test_client: HTTPX AsyncClient bound to an app serving `database`
"""

import copy
import os

# Settings are read at import time; set them before importing the package
os.environ["MONGODB_URI"] = "mongodb://localhost:27017"
os.environ["DB_NAME"] = "readly_test"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CORS_ORIGINS"] = "*"

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo.errors import DuplicateKeyError
from pymongo.results import DeleteResult, InsertOneResult

from readly.database import Database


# ══════════════════════════════════════════════════════════════════════════
# In-memory store
# ══════════════════════════════════════════════════════════════════════════


def _matches(document, query):
    return all(document.get(key) == value for key, value in (query or {}).items())


class InMemoryCursor:
    """Chainable cursor: sort() and limit() are applied by to_list()."""

    def __init__(self, documents):
        self._documents = documents
        self._sort = None
        self._limit = 0

    def sort(self, key, direction=1):
        self._sort = (key, direction)
        return self

    def limit(self, limit):
        self._limit = limit
        return self

    async def to_list(self, length=None):
        documents = list(self._documents)
        if self._sort:
            key, direction = self._sort
            documents.sort(key=lambda d: d.get(key), reverse=direction < 0)
        if self._limit:
            documents = documents[: self._limit]
        if length is not None:
            documents = documents[:length]
        return documents


class InMemoryCollection:
    def __init__(self, name):
        self.name = name
        self.documents = []
        # MongoDB always keeps a unique index on _id
        self.indexes = {"_id_": (["_id"], True)}

    async def insert_one(self, document):
        document.setdefault("_id", ObjectId())
        for name, (keys, unique) in self.indexes.items():
            if not unique:
                continue
            for existing in self.documents:
                if all(existing.get(k) == document.get(k) for k in keys):
                    raise DuplicateKeyError(
                        f"E11000 duplicate key error collection: {self.name} index: {name}",
                        11000,
                        {
                            "code": 11000,
                            "keyPattern": {k: 1 for k in keys},
                            "keyValue": {k: document.get(k) for k in keys},
                        },
                    )
        self.documents.append(copy.deepcopy(document))
        return InsertOneResult(document["_id"], True)

    def find(self, query=None):
        return InMemoryCursor(
            [copy.deepcopy(d) for d in self.documents if _matches(d, query)]
        )

    async def find_one(self, query=None):
        for document in self.documents:
            if _matches(document, query):
                return copy.deepcopy(document)
        return None

    async def delete_one(self, query):
        for index, document in enumerate(self.documents):
            if _matches(document, query):
                del self.documents[index]
                return DeleteResult({"n": 1, "ok": 1.0}, True)
        return DeleteResult({"n": 0, "ok": 1.0}, True)

    async def create_index(self, keys, unique=False, name=None):
        name = name or "_".join(f"{k}_{d}" for k, d in keys)
        self.indexes[name] = ([k for k, _ in keys], unique)
        return name

    def count(self, query=None):
        return sum(1 for d in self.documents if _matches(d, query))


class InMemoryDatabase:
    def __init__(self, name):
        self.name = name
        self._collections = {}

    def __getitem__(self, name):
        if name not in self._collections:
            self._collections[name] = InMemoryCollection(name)
        return self._collections[name]

    async def command(self, name):
        return {"ok": 1.0}


class InMemoryClient:
    def __init__(self):
        self._databases = {}
        self.admin = InMemoryDatabase("admin")
        self.closed = False

    def __getitem__(self, name):
        if name not in self._databases:
            self._databases[name] = InMemoryDatabase(name)
        return self._databases[name]

    async def close(self):
        self.closed = True


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════


@pytest.fixture
def mongo_client():
    return InMemoryClient()


@pytest.fixture
def database(mongo_client):
    """A Database whose collections live in memory."""
    return Database(mongo_client, "readly_test")


@pytest_asyncio.fixture
async def indexed_database(database):
    """`database` with the production indexes in place."""
    await database.ensure_indexes()
    return database


@pytest_asyncio.fixture
async def test_client(indexed_database):
    """
    HTTPX AsyncClient talking to an app that serves `indexed_database`.

    Usage:
        async def test_banner(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    from readly.main import create_app

    app = create_app(database=indexed_database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
