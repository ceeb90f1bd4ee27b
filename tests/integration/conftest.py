"""
Fixtures for integration tests
"""

import pytest
from datetime import datetime, timezone
from httpx import ASGITransport, AsyncClient

from pickem.core.dependencies import get_clock
from pickem.core.security import create_access_token
from pickem.database import Database
from pickem.main import app

# Wednesday of week 3, 2024
FIXED_NOW = datetime(2024, 9, 18, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
async def client(test_db):
    """
    HTTP client for testing API endpoints.

    Points the database singleton at the test database and freezes the
    clock in week 3 of 2024.
    """
    original_db = Database.db
    Database.db = test_db
    app.dependency_overrides[get_clock] = lambda: (lambda: FIXED_NOW)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    Database.db = original_db


async def _headers_for(test_db, user_id, username, is_admin):
    await test_db["users"].update_one(
        {"_id": user_id},
        {"$set": {
            "username": username,
            "password_hash": None,
            "picks": [],
            "created_at": datetime.now(timezone.utc),
            "last_login_at": None,
            "is_active": True,
            "is_admin": is_admin
        }},
        upsert=True
    )

    token = create_access_token(user_id, username)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def auth_headers(client, test_db):
    """Authentication headers for a regular player."""
    return await _headers_for(test_db, "player_1", "player", is_admin=False)


@pytest.fixture
async def admin_headers(client, test_db):
    """Authentication headers for an administrator."""
    return await _headers_for(test_db, "admin_1", "admin", is_admin=True)
