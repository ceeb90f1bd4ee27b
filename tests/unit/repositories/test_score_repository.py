"""
Unit tests for ScoreRepository and SeasonTotalRepository
"""

import pytest

from pickem.database import create_indexes
from pickem.repositories.score_repository import ScoreRepository, SeasonTotalRepository


class TestScoreRepository:
    """Test suite for weekly score storage."""

    @pytest.mark.asyncio
    async def test_upsert_creates_then_overwrites(self, test_db):
        await create_indexes(test_db)
        repo = ScoreRepository(test_db)

        await repo.upsert("u1", 3, 2024, 2)
        await repo.upsert("u1", 3, 2024, 5)

        assert await test_db["scores"].count_documents({}) == 1
        score = await repo.get("u1", 3, 2024)
        assert score.score == 5
        assert score.updated_at is not None

    @pytest.mark.asyncio
    async def test_zero_score_is_stored(self, test_db):
        repo = ScoreRepository(test_db)

        await repo.upsert("u1", 3, 2024, 0)

        score = await repo.get("u1", 3, 2024)
        assert score is not None
        assert score.score == 0

    @pytest.mark.asyncio
    async def test_get_missing(self, test_db):
        assert await ScoreRepository(test_db).get("u1", 3, 2024) is None

    @pytest.mark.asyncio
    async def test_user_season_scores(self, test_db):
        repo = ScoreRepository(test_db)
        await repo.upsert("u1", 4, 2024, 1)
        await repo.upsert("u1", 3, 2024, 2)
        await repo.upsert("u1", 3, 2023, 7)
        await repo.upsert("u2", 3, 2024, 9)

        scores = await repo.get_user_season_scores("u1", 2024)

        assert [(s.week, s.score) for s in scores] == [(3, 2), (4, 1)]

    @pytest.mark.asyncio
    async def test_get_by_period(self, test_db):
        repo = ScoreRepository(test_db)
        await repo.upsert("u1", 3, 2024, 1)
        await repo.upsert("u2", 3, 2024, 3)
        await repo.upsert("u3", 4, 2024, 2)

        scores = await repo.get_by_period(3, 2024)

        assert [(s.user_id, s.score) for s in scores] == [("u2", 3), ("u1", 1)]

    @pytest.mark.asyncio
    async def test_sum_by_user(self, test_db):
        repo = ScoreRepository(test_db)
        await repo.upsert("u1", 3, 2024, 1)
        await repo.upsert("u1", 4, 2024, 2)
        await repo.upsert("u2", 3, 2024, 0)
        await repo.upsert("u1", 3, 2023, 8)

        assert await repo.sum_by_user(2024) == {"u1": 3, "u2": 0}
        assert await repo.sum_by_user(2022) == {}


class TestSeasonTotalRepository:
    """Test suite for cached season totals."""

    @pytest.mark.asyncio
    async def test_upsert_creates_then_overwrites(self, test_db):
        await create_indexes(test_db)
        repo = SeasonTotalRepository(test_db)

        await repo.upsert("u1", 2024, 3)
        await repo.upsert("u1", 2024, 1)

        assert await test_db["season_totals"].count_documents({}) == 1
        total = await repo.get("u1", 2024)
        assert total.total_score == 1

    @pytest.mark.asyncio
    async def test_get_by_season_sorted(self, test_db):
        repo = SeasonTotalRepository(test_db)
        await repo.upsert("u1", 2024, 1)
        await repo.upsert("u2", 2024, 4)
        await repo.upsert("u3", 2023, 9)

        totals = await repo.get_by_season(2024)

        assert [(t.user_id, t.total_score) for t in totals] == [("u2", 4), ("u1", 1)]
