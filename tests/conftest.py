"""
Pytest configuration and shared fixtures.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError

from api.config import APIConfig
from api.database import BookRepository
from api.main import create_app
from utilities.config import BookstoreDatabaseSettings


class FakeCursor:
    """Cursor over a snapshot of documents."""

    def __init__(self, documents):
        self._documents = documents

    async def to_list(self, length=None):
        return [dict(document) for document in self._documents]


class FakeCollection:
    """
    In-memory stand-in for an AsyncIOMotorCollection.
    Supports the _id-keyed calls made by BookRepository.
    """

    name = "Books"

    def __init__(self):
        self.documents = {}
        self.database = AsyncMock()
        self.database.command.return_value = {"ok": 1.0}

    def find(self, filter_query):
        assert filter_query == {}
        return FakeCursor(list(self.documents.values()))

    async def find_one(self, filter_query):
        document = self.documents.get(filter_query["_id"])
        return dict(document) if document is not None else None

    async def insert_one(self, document):
        document.setdefault("_id", ObjectId())
        if document["_id"] in self.documents:
            raise DuplicateKeyError("E11000 duplicate key error")
        self.documents[document["_id"]] = dict(document)
        return SimpleNamespace(inserted_id=document["_id"], acknowledged=True)

    async def replace_one(self, filter_query, replacement, upsert=False):
        object_id = filter_query["_id"]
        if object_id not in self.documents:
            return SimpleNamespace(matched_count=0, modified_count=0, upserted_id=None)
        self.documents[object_id] = {"_id": object_id, **replacement}
        return SimpleNamespace(matched_count=1, modified_count=1, upserted_id=None)

    async def delete_one(self, filter_query):
        removed = self.documents.pop(filter_query["_id"], None)
        return SimpleNamespace(deleted_count=0 if removed is None else 1)


@pytest.fixture
def fake_collection():
    """Create an empty in-memory books collection."""
    return FakeCollection()


@pytest.fixture
def api_config():
    """API configuration for tests."""
    return APIConfig(log_level="WARNING", log_format="console")


@pytest.fixture
def app(api_config, fake_collection):
    """Create an application wired to the in-memory collection."""
    application = create_app(api_config, BookstoreDatabaseSettings())
    application.state.book_repository = BookRepository(fake_collection)
    return application


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def clean_code():
    """Request body for a sample book."""
    return {
        "name": "Clean Code",
        "price": 43.15,
        "category": "Computers",
        "author": "Robert C. Martin"
    }
