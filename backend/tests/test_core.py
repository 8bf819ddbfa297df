"""
Tests for counters, serialisation, config parsing and the system endpoints
"""

import asyncio
import importlib
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, patch

from bson import ObjectId
from pymongo import ReturnDocument

from resort.core import config
from resort.db.counters import next_sequence
from resort.db.database import to_object_id
from resort.models.common import serialize_doc


def test_next_sequence_increments_atomically():
    counters = MagicMock()
    counters.find_one_and_update = AsyncMock(return_value={"name": "paymentOrderNo", "seq": 5})
    with patch("resort.db.counters.get_counters_collection", return_value=counters):
        value = asyncio.run(next_sequence("paymentOrderNo", start=1000))

    assert value == 1005
    args, kwargs = counters.find_one_and_update.call_args
    assert args[0] == {"name": "paymentOrderNo"}
    assert args[1]["$inc"] == {"seq": 1}
    assert kwargs["upsert"] is True
    assert kwargs["return_document"] == ReturnDocument.AFTER


def test_to_object_id():
    oid = ObjectId()
    assert to_object_id(oid) is oid
    assert to_object_id(str(oid)) == oid
    assert to_object_id("nope") is None
    assert to_object_id(None) is None


def test_serialize_doc_converts_ids_recursively():
    oid, ref = ObjectId(), ObjectId()
    when = datetime(2024, 1, 1)
    doc = {"_id": oid, "package_id": ref, "rows": [{"_id": ref}], "created_at": when}
    assert serialize_doc(doc) == {
        "id": str(oid),
        "package_id": str(ref),
        "rows": [{"id": str(ref)}],
        "created_at": when,
    }


def test_get_int_env_is_lenient(monkeypatch):
    monkeypatch.setenv("RESORT_TEST_PORT", " 8080; ")
    assert config._get_int_env("RESORT_TEST_PORT", 1) == 8080
    monkeypatch.setenv("RESORT_TEST_PORT", "port=9090")
    assert config._get_int_env("RESORT_TEST_PORT", 1) == 9090
    monkeypatch.setenv("RESORT_TEST_PORT", "none")
    assert config._get_int_env("RESORT_TEST_PORT", 7) == 7


def test_get_float_env(monkeypatch):
    monkeypatch.setenv("RESORT_TEST_RATE", "300.5")
    assert config._get_float_env("RESORT_TEST_RATE", 1.0) == 300.5
    monkeypatch.setenv("RESORT_TEST_RATE", "abc")
    assert config._get_float_env("RESORT_TEST_RATE", 330.0) == 330.0


def test_environment_defaults_to_development(monkeypatch):
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    monkeypatch.delenv("ENV_FILE", raising=False)
    monkeypatch.delenv("ENV", raising=False)
    reloaded = importlib.reload(config)
    assert reloaded.ENVIRONMENT == "development"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["code"] == 0
    assert body["data"]["status"] == "healthy"


def test_root(client):
    assert client.get("/").json()["msg"] == "ok"
