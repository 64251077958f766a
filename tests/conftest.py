"""Pytest fixtures for testing."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from registry_api.core.config import Settings
from registry_api.main import create_app
from registry_api.models.base import Base

# Lowest work factor bcrypt accepts; keeps the suite fast.
TEST_BCRYPT_ROUNDS = 4


@pytest.fixture()
def settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway SQLite database file."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'registry_test.db'}",
        bcrypt_rounds=TEST_BCRYPT_ROUNDS,
        environment="development",
    )


@pytest_asyncio.fixture(scope="function")
async def app(settings: Settings) -> AsyncGenerator[FastAPI, None]:
    """Create the application and its tables; drop them afterwards."""
    application = create_app(settings)

    engine = application.state.database.engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield application

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    application.dependency_overrides.clear()
    await application.state.database.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create test client bound to the application.

    Yields:
        AsyncClient configured for testing
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def db(app: FastAPI) -> AsyncGenerator[AsyncSession, None]:
    """Session on the same database, for asserting on stored rows."""
    async with app.state.database.session_factory() as session:
        yield session


@pytest.fixture()
def org_payload() -> dict:
    return {
        "org_name": "A",
        "type": "X",
        "industry": "I",
        "address": "addr",
        "poc_name": "P",
        "poc_email": "p@acme.io",
        "price_per_unit": 10,
    }


@pytest.fixture()
def user_payload() -> dict:
    return {
        "name": "Jane Doe",
        "email": "jane@acme.io",
        "password_hash": "S3cretPass!",
        "role": "operator",
        "dob": "1990-04-12",
        "address": "1 Main Street",
        "phone_number": "+1-555-0100",
        "location": "Springfield",
        "client_id": 42,
        "client_type": "enterprise",
        "registered_device_no": "DEV-0001",
    }
