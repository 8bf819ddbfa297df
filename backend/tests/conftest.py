"""
Shared fixtures: a TestClient without lifespan (no MongoDB) and helpers that
imitate motor collections and cursors with unittest.mock.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from resort.main import app


def make_cursor(docs):
    """Motor cursor stand-in: chainable sort/skip/limit and an async to_list."""
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=list(docs))
    return cursor


def make_collection():
    col = MagicMock()
    col.insert_one = AsyncMock(return_value=MagicMock(inserted_id=ObjectId()))
    col.find_one = AsyncMock(return_value=None)
    col.update_one = AsyncMock(return_value=MagicMock(matched_count=1, modified_count=1))
    col.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    col.count_documents = AsyncMock(return_value=0)
    col.find.return_value = make_cursor([])
    col.aggregate.return_value = make_cursor([])
    return col


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def collection():
    return make_collection()


@pytest.fixture
def cursor_factory():
    return make_cursor
