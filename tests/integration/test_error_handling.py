"""Integration tests for storage failure handling."""
import logging

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from registry_api.models.organization import Organization
from registry_api.models.user import User


async def _drop_table(app: FastAPI, table) -> None:
    async with app.state.database.engine.begin() as conn:
        await conn.run_sync(table.drop)


@pytest.mark.asyncio
async def test_storage_failure_returns_generic_500(
    app: FastAPI,
    client: AsyncClient,
    caplog: pytest.LogCaptureFixture,
):
    await _drop_table(app, Organization.__table__)

    with caplog.at_level(logging.ERROR, logger="registry_api.api.error_handlers"):
        response = await client.get("/organizations")

    assert response.status_code == 500
    assert response.json() == {"error": "storage_error", "message": "A storage error occurred"}
    # The driver message stays server side
    assert "no such table" not in response.text
    assert any("storage_error" in record.getMessage() for record in caplog.records)


@pytest.mark.asyncio
async def test_storage_failure_on_write_does_not_echo_credentials(
    app: FastAPI,
    client: AsyncClient,
    user_payload: dict,
    caplog: pytest.LogCaptureFixture,
):
    await _drop_table(app, User.__table__)

    with caplog.at_level(logging.DEBUG):
        response = await client.post("/users", json=user_payload)

    assert response.status_code == 500
    assert response.json()["error"] == "storage_error"
    assert user_payload["password_hash"] not in response.text
    assert all(user_payload["password_hash"] not in record.getMessage() for record in caplog.records)


@pytest.mark.asyncio
async def test_each_request_gets_a_fresh_session_after_failure(
    app: FastAPI,
    client: AsyncClient,
    org_payload: dict,
):
    """A failed statement does not poison later requests."""
    failed = await client.get("/users/abc")
    assert failed.status_code == 400

    await _drop_table(app, User.__table__)
    assert (await client.get("/users")).status_code == 500

    response = await client.post("/organizations", json=org_payload)
    assert response.status_code == 200
