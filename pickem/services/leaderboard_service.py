"""
LeaderboardService - Calculates leaderboards from weekly scores.

The season leaderboard is derived on the fly from the `scores` collection,
which is the source of truth. `season_totals` is a cache kept up to date by
ScoreService; it is exposed here only for inspection and consistency checks.
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from pickem.models.leaderboard import LeaderboardEntry, StaleSeasonTotal
from pickem.models.score import SeasonTotal
from pickem.repositories.score_repository import ScoreRepository, SeasonTotalRepository
from pickem.repositories.user_repository import UserRepository


class LeaderboardService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.score_repo = ScoreRepository(db)
        self.season_total_repo = SeasonTotalRepository(db)
        self.user_repo = UserRepository(db)

    async def _rank(
        self,
        points_by_user: dict[str, int],
        season: int,
        week: Optional[int] = None,
        limit: int = 100
    ) -> list[LeaderboardEntry]:
        usernames = await self.user_repo.get_usernames(list(points_by_user))

        # Sort by points (descending), then username
        rows = sorted(
            (
                (points, usernames.get(user_id, "Unknown"), user_id)
                for user_id, points in points_by_user.items()
            ),
            key=lambda row: (-row[0], row[1])
        )

        return [
            LeaderboardEntry(
                rank=idx + 1,
                user_id=user_id,
                username=username,
                total_points=points,
                season=season,
                week=week
            )
            for idx, (points, username, user_id) in enumerate(rows[:limit])
        ]

    async def get_season_leaderboard(
        self,
        season: int,
        limit: int = 100
    ) -> list[LeaderboardEntry]:
        """Season leaderboard, summing every weekly score of the season."""
        totals = await self.score_repo.sum_by_user(season)
        return await self._rank(totals, season, limit=limit)

    async def get_week_leaderboard(
        self,
        week: int,
        season: int,
        limit: int = 100
    ) -> list[LeaderboardEntry]:
        """Leaderboard for a single week."""
        scores = await self.score_repo.get_by_period(week, season)
        return await self._rank(
            {s.user_id: s.score for s in scores},
            season,
            week=week,
            limit=limit
        )

    async def get_cached_season_totals(self, season: int) -> list[SeasonTotal]:
        """Season totals as stored by the last recomputation."""
        return await self.season_total_repo.get_by_season(season)

    async def find_stale_season_totals(self, season: int) -> list[StaleSeasonTotal]:
        """
        Compare cached season totals with the sum of weekly scores.

        Returns the users whose cache is missing or differs.
        """
        derived = await self.score_repo.sum_by_user(season)
        cached = {t.user_id: t.total_score for t in await self.get_cached_season_totals(season)}

        stale = []
        for user_id in sorted(set(derived) | set(cached)):
            derived_total = derived.get(user_id, 0)
            cached_total = cached.get(user_id)
            if cached_total != derived_total:
                stale.append(StaleSeasonTotal(
                    user_id=user_id,
                    season=season,
                    cached_total=cached_total,
                    derived_total=derived_total
                ))

        return stale
