"""
Contract tests for /api/packages
"""

from unittest.mock import AsyncMock, MagicMock, patch

from bson import ObjectId

PACKAGES = "resort.router.packages.get_packages_collection"

PACKAGE = {
    "description": "Morning game drive",
    "destination": "Yala",
    "date": "2025-03-14",
    "period": "Half day",
    "visitors": 4,
    "price": 38000,
    "type": "Jeep",
}


def test_create_then_list_package(client, collection, cursor_factory):
    with patch(PACKAGES, return_value=collection):
        created = client.post("/api/packages/", json=PACKAGE)
        assert created.status_code == 201
        stored = collection.insert_one.call_args.args[0]

        collection.find.return_value = cursor_factory([stored])
        listed = client.get("/api/packages/")

    package_id = created.json()["data"]["id"]
    assert [p["id"] for p in listed.json()["data"]] == [package_id]


def test_package_requires_fields(client, collection):
    with patch(PACKAGES, return_value=collection):
        response = client.post("/api/packages/", json={"destination": "Yala"})
    assert response.status_code == 422


def test_update_and_delete_package(client, collection):
    oid = ObjectId()
    collection.find_one = AsyncMock(return_value={"_id": oid, **PACKAGE, "price": 40000})
    with patch(PACKAGES, return_value=collection):
        response = client.put(f"/api/packages/{oid}", json={"price": 40000})
        assert response.status_code == 200
        assert response.json()["data"]["price"] == 40000
        assert client.delete(f"/api/packages/{oid}").status_code == 200

        collection.update_one = AsyncMock(return_value=MagicMock(matched_count=0))
        assert client.put(f"/api/packages/{oid}", json={"price": 1}).status_code == 404
        assert client.get("/api/packages/zzz").status_code == 404
