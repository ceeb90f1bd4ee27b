"""
📊 ScoreRepository - Puntuaciones semanales y totales de temporada

Colecciones:
- scores: un documento por (user_id, week, season)
- season_totals: un documento por (user_id, season)

Ambas se escriben con upsert por filtro: se crean la primera vez y se
sobrescriben en cada recálculo.
"""

from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING

from pickem.models.score import Score, SeasonTotal


class ScoreRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["scores"]

    async def upsert(self, user_id: str, week: int, season: int, score: int) -> None:
        """Crea o sobrescribe la puntuación de una semana"""
        await self.collection.update_one(
            {"user_id": user_id, "week": week, "season": season},
            {
                "$set": {
                    "score": score,
                    "updated_at": datetime.now(timezone.utc)
                }
            },
            upsert=True
        )

    async def get(self, user_id: str, week: int, season: int) -> Optional[Score]:
        doc = await self.collection.find_one({
            "user_id": user_id,
            "week": week,
            "season": season
        })
        return Score(**doc) if doc else None

    async def get_user_season_scores(self, user_id: str, season: int) -> list[Score]:
        """Todas las semanas de un usuario en una temporada"""
        cursor = self.collection.find({
            "user_id": user_id,
            "season": season
        }).sort("week", 1)

        docs = await cursor.to_list(length=None)
        return [Score(**doc) for doc in docs]

    async def get_by_period(self, week: int, season: int) -> list[Score]:
        """Puntuaciones de todos los usuarios en una semana"""
        cursor = self.collection.find({
            "week": week,
            "season": season
        }).sort("score", DESCENDING)

        docs = await cursor.to_list(length=None)
        return [Score(**doc) for doc in docs]

    async def sum_by_user(self, season: int) -> dict[str, int]:
        """
        🔥 Suma de puntuaciones por usuario en una temporada.

        Se calcula con una agregación sobre scores, sin pasar por season_totals.
        """
        pipeline = [
            {"$match": {"season": season}},
            {"$group": {"_id": "$user_id", "total": {"$sum": "$score"}}},
        ]

        docs = await self.collection.aggregate(pipeline).to_list(length=None)
        return {doc["_id"]: doc["total"] for doc in docs}


class SeasonTotalRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["season_totals"]

    async def upsert(self, user_id: str, season: int, total_score: int) -> None:
        """Crea o sobrescribe el total de temporada de un usuario"""
        await self.collection.update_one(
            {"user_id": user_id, "season": season},
            {
                "$set": {
                    "total_score": total_score,
                    "updated_at": datetime.now(timezone.utc)
                }
            },
            upsert=True
        )

    async def get(self, user_id: str, season: int) -> Optional[SeasonTotal]:
        doc = await self.collection.find_one({"user_id": user_id, "season": season})
        return SeasonTotal(**doc) if doc else None

    async def get_by_season(self, season: int) -> list[SeasonTotal]:
        """Totales de una temporada, de mayor a menor"""
        cursor = self.collection.find({"season": season}).sort("total_score", DESCENDING)
        docs = await cursor.to_list(length=None)
        return [SeasonTotal(**doc) for doc in docs]
