"""Contract tests for user endpoints.

Status codes and body shapes for /users and /users/{id}. The credential
hash must never appear in a response.
"""
from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from registry_api.api.deps import get_password_hasher


@pytest.mark.asyncio
async def test_create_user_returns_row_without_credential(client: AsyncClient, user_payload: dict):
    response = await client.post("/users", json=user_payload)

    assert response.status_code == 200
    data = response.json()
    assert isinstance(data["id"], int)
    assert data["name"] == "Jane Doe"
    assert data["email"] == "jane@acme.io"
    assert data["role"] == "operator"
    assert data["dob"] == "1990-04-12"
    assert data["client_id"] == 42
    assert data["registered_device_no"] == "DEV-0001"
    assert "password_hash" not in data
    assert "password" not in data
    assert user_payload["password_hash"] not in response.text


@pytest.mark.asyncio
async def test_create_then_get_round_trip(client: AsyncClient, user_payload: dict):
    created = (await client.post("/users", json=user_payload)).json()

    response = await client.get(f"/users/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


@pytest.mark.asyncio
async def test_list_users_omits_credentials(client: AsyncClient, user_payload: dict):
    await client.post("/users", json=user_payload)
    await client.post("/users", json={**user_payload, "email": "john@acme.io", "name": "John"})

    response = await client.get("/users")

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 2
    assert all("password_hash" not in row for row in data)


@pytest.mark.asyncio
async def test_get_missing_user_returns_404(client: AsyncClient):
    response = await client.get("/users/424242")

    assert response.status_code == 404
    assert response.json() == {"error": "not_found", "message": "User not found"}


@pytest.mark.asyncio
async def test_update_user_replaces_fields(client: AsyncClient, user_payload: dict):
    created = (await client.post("/users", json=user_payload)).json()
    replacement = {
        "name": "Jane Smith",
        "email": "jane.smith@acme.io",
        "password_hash": "An0therSecret!",
        "role": "admin",
    }

    response = await client.put(f"/users/{created['id']}", json=replacement)

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == created["id"]
    assert data["name"] == "Jane Smith"
    assert data["email"] == "jane.smith@acme.io"
    assert data["role"] == "admin"
    # Full replace: omitted optional fields are cleared
    assert data["dob"] is None
    assert data["client_id"] is None
    assert data["registered_device_no"] is None
    assert "password_hash" not in data


@pytest.mark.asyncio
async def test_update_missing_user_returns_404(client: AsyncClient, user_payload: dict):
    response = await client.put("/users/424242", json=user_payload)

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


@pytest.mark.asyncio
async def test_delete_user_returns_204(client: AsyncClient, user_payload: dict):
    created = (await client.post("/users", json=user_payload)).json()

    response = await client.delete(f"/users/{created['id']}")

    assert response.status_code == 204
    assert (await client.get(f"/users/{created['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_delete_missing_user_still_returns_204(client: AsyncClient):
    response = await client.delete("/users/424242")

    assert response.status_code == 204


@pytest.mark.asyncio
async def test_create_user_validation_fails(client: AsyncClient, user_payload: dict):
    payload = {key: value for key, value in user_payload.items() if key != "password_hash"}
    response = await client.post("/users", json=payload)
    assert response.status_code == 400
    fields = {detail["field"] for detail in response.json()["details"]}
    assert "body.password_hash" in fields

    response = await client.post("/users", json={**user_payload, "password_hash": "short"})
    assert response.status_code == 400

    response = await client.post("/users", json={**user_payload, "email": "nope"})
    assert response.status_code == 400

    response = await client.post("/users", json={**user_payload, "dob": "not-a-date"})
    assert response.status_code == 400

    response = await client.post("/users", json={**user_payload, "client_id": "abc"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_multibyte_password_over_bcrypt_limit_returns_400(
    app: FastAPI,
    client: AsyncClient,
    user_payload: dict,
):
    """40 characters but 80 UTF-8 bytes: rejected by validation, never hashed."""
    hasher = Mock(return_value="unused")
    app.dependency_overrides[get_password_hasher] = lambda: hasher

    response = await client.post("/users", json={**user_payload, "password_hash": "é" * 40})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "validation_error"
    assert {detail["field"] for detail in body["details"]} == {"body.password_hash"}
    hasher.assert_not_called()
