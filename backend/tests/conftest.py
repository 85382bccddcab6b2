"""
Acaia Club Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (a throwaway database, API
       clients with and without a logged-in staff member, a mocked session).
How:   Every test gets its own application built by create_app() against an
       in-memory SQLite database, so tests never share rows.
Who:   Used by all test files in the tests/ directory.
When:  Fixtures are created fresh for each test.

Fixture Hierarchy:
    test_settings          SQLite, fixed secret, cheap bcrypt rounds
    └── app                create_app(test_settings) with tables created
        ├── test_client    anonymous HTTPX AsyncClient
        ├── staff_user     an active MANAGER with PIN 1234
        └── auth_client    HTTPX AsyncClient already logged in as staff_user
        └── login_as       factory: a fresh client logged in with a given role

    mock_db_session        AsyncMock standing in for AsyncSession (unit tests)
"""

from typing import AsyncGenerator, Awaitable, Callable, List
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from acaiaclub.config import Settings
from acaiaclub.main import create_app
from acaiaclub.models import Role, User
from acaiaclub.services.auth_service import hash_pin

STAFF_PIN = "1234"


# ══════════════════════════════════════════════════════════════════════════
# Application Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings() -> Settings:
    """
    Settings for an isolated test application.

    What:    In-memory SQLite, a fixed 32-char secret, bcrypt at 4 rounds.
    Why:     Tests must not touch a real database, and bcrypt at the
             production work factor would make every login take ~250ms.
    """
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        auth_secret="test-secret-test-secret-test-sec",
        environment="test",
        pin_hash_rounds=4,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(test_settings) -> AsyncGenerator[FastAPI, None]:
    """A fresh application with every table created; disposed afterwards."""
    application = create_app(test_settings)
    await application.state.database.create_all()
    yield application
    await application.state.database.dispose()


@pytest_asyncio.fixture
async def test_client(app) -> AsyncGenerator[AsyncClient, None]:
    """
    Provides an async HTTP test client for endpoint testing.

    What:    HTTPX AsyncClient configured to talk to the test app.
    How:     ASGITransport routes requests straight into the app; cookies
             set by a response are replayed on later requests.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def staff_user(app, test_settings) -> User:
    """An active MANAGER whose PIN is STAFF_PIN."""
    user = User(
        name="Ana",
        role=Role.MANAGER,
        pin_hash=hash_pin(STAFF_PIN, rounds=test_settings.pin_hash_rounds),
        is_active=True,
    )
    async with app.state.database.session() as session:
        session.add(user)
    return user


@pytest_asyncio.fixture
async def auth_client(test_client, staff_user) -> AsyncClient:
    """The test client after a successful PIN login (session cookie set)."""
    response = await test_client.post("/api/auth", json={"pin": STAFF_PIN})
    assert response.status_code == 200, response.text
    return test_client


@pytest_asyncio.fixture
async def login_as(app, test_settings) -> AsyncGenerator[Callable[[Role], Awaitable[AsyncClient]], None]:
    """
    Factory for clients logged in as a staff member with a given role.

    What:    Each call adds an active user with that role and returns a
             separate AsyncClient holding their session cookie.
    Why:     Role checks need a COOK, a SALES rep, a DJ... side by side
             with the MANAGER of auth_client.

    Usage:
        async def test_cook_cannot_order(login_as):
            cook = await login_as(Role.COOK)
            response = await cook.post("/api/purchase-orders", json={...})
            assert response.status_code == 403
    """
    clients: List[AsyncClient] = []

    async def _login(role: Role) -> AsyncClient:
        # One PIN per role; logins resolve to the first user whose PIN matches
        pin = f"9{list(Role).index(role):03d}"
        async with app.state.database.session() as session:
            session.add(
                User(
                    name=role.value.title(),
                    role=role,
                    pin_hash=hash_pin(pin, rounds=test_settings.pin_hash_rounds),
                    is_active=True,
                )
            )
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(client)
        response = await client.post("/api/auth", json={"pin": pin})
        assert response.status_code == 200, response.text
        return client

    yield _login

    for client in clients:
        await client.aclose()


# ══════════════════════════════════════════════════════════════════════════
# Unit Test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    What:    An AsyncMock that simulates AsyncSession behavior.
    Why:     Service error translation is easier to drive with a mock than
             by provoking real constraint failures.

    Usage:
        async def test_get_missing(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = None
            with pytest.raises(NotFoundError):
                await service.get(mock_db_session, uuid4())
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Payload Helpers
# ══════════════════════════════════════════════════════════════════════════

async def create_floor_plan(client: AsyncClient, name: str = "Main Hall") -> dict:
    response = await client.post("/api/floorplans", json={"name": name})
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def create_workstation(client: AsyncClient, name: str = "Bar 1") -> dict:
    response = await client.post("/api/workstations", json={"name": name})
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def create_slot(client: AsyncClient, row: int = 0, column: int = 0) -> dict:
    response = await client.post("/api/vinyl-slots", json={"row": row, "column": column})
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def create_record(client: AsyncClient, slot_id: str, position: int = 0, **fields) -> dict:
    body = {
        "title": fields.get("title", "Kind of Blue"),
        "artist": fields.get("artist", "Miles Davis"),
        "slotId": slot_id,
        "positionInSlot": position,
    }
    response = await client.post("/api/vinyl-records", json=body)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def create_supplier(client: AsyncClient, name: str = "Fresh Fruits Ltda") -> dict:
    response = await client.post("/api/suppliers", json={"name": name})
    assert response.status_code == 201, response.text
    return response.json()["data"]
