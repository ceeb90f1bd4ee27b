"""
Pytest fixtures and configuration for all tests.
"""

import os

# Settings are read once at import time, so the environment goes first
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("JWT_SECRET", "test-secret-key-at-least-32-chars-long")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from typing import AsyncGenerator
from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from mongomock_motor import AsyncMongoMockClient

from pickem.core.locks import ScopeLocks

# Real MongoDB only when TEST_MONGODB_URI is set, in-memory otherwise
TEST_DB_URI = os.getenv("TEST_MONGODB_URI")
TEST_DB_NAME = "football_picks_test"

# Week 3 of 2024 starts on the anchor date
WEEK = 3
SEASON = 2024


@pytest.fixture(scope="session")
def worker_id(request):
    """
    Return the worker ID when using pytest-xdist, otherwise 'master'.
    This allows each worker to use its own test database.
    """
    if hasattr(request.config, 'workerinput'):
        return request.config.workerinput['workerid']
    return 'master'


@pytest.fixture(scope="function")
async def test_db(worker_id) -> AsyncGenerator[AsyncIOMotorDatabase, None]:
    """
    Provide a clean test database for each test.

    Automatically cleans up after each test.
    """
    client = AsyncIOMotorClient(TEST_DB_URI) if TEST_DB_URI else AsyncMongoMockClient()
    db_name = f"{TEST_DB_NAME}_{worker_id}" if worker_id != "master" else TEST_DB_NAME
    db = client[db_name]

    yield db

    # Cleanup: drop all collections after test
    collection_names = await db.list_collection_names()
    for collection_name in collection_names:
        await db[collection_name].drop()

    if TEST_DB_URI:
        client.close()


@pytest.fixture
def locks():
    """Fresh per-test scope locks (asyncio locks must not outlive the test loop)."""
    return ScopeLocks()


@pytest.fixture
def sample_user_data():
    """Sample user document for testing."""
    return {
        "_id": "user_1",
        "username": "alice",
        "password_hash": None,
        "picks": [],
        "created_at": datetime(2024, 9, 1, tzinfo=timezone.utc),
        "last_login_at": None,
        "is_active": True,
        "is_admin": False
    }


@pytest.fixture
def make_user(test_db, sample_user_data):
    """Insert a user with the given picks ({game_id: label})."""
    async def _make_user(user_id, username=None, picks=None, created_at=None, **extra):
        doc = dict(sample_user_data)
        doc.update({
            "_id": user_id,
            "username": username or user_id,
            "picks": [{"game_id": g, "pick": p} for g, p in (picks or {}).items()],
        })
        if created_at:
            doc["created_at"] = created_at
        doc.update(extra)
        await test_db["users"].insert_one(doc)
        return doc

    return _make_user


@pytest.fixture
def make_game(test_db):
    """Insert a game, optionally with a winner."""
    async def _make_game(
        game_id,
        home_team="Home",
        away_team="Away",
        week=WEEK,
        season=SEASON,
        winner=None
    ):
        doc = {
            "_id": game_id,
            "home_team": home_team,
            "away_team": away_team,
            "week": week,
            "season": season,
            "winner": winner,
            "created_at": datetime(season, 9, 1, tzinfo=timezone.utc),
        }
        await test_db["games"].insert_one(doc)
        return doc

    return _make_game


@pytest.fixture
def sum_scores(test_db):
    """Direct summation of a user's weekly scores in the database."""
    async def _sum_scores(user_id, season=SEASON):
        docs = await test_db["scores"].find({"user_id": user_id, "season": season}).to_list(length=None)
        return sum(d["score"] for d in docs)

    return _sum_scores
