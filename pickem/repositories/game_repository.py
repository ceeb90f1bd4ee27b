"""
🏈 GameRepository - CRUD para los partidos

Cada partido pertenece a una (semana, temporada) y guarda el ganador
una vez que el admin lo registra.
"""

from datetime import datetime, timezone
from typing import Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from pickem.models.game import Game


class GameRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["games"]

    # ============================================
    # 📌 CREATE
    # ============================================

    async def create(
        self,
        home_team: str,
        away_team: str,
        week: int,
        season: int
    ) -> Game:
        """Inserta un partido nuevo, sin ganador"""
        game_doc = {
            "_id": str(ObjectId()),
            "home_team": home_team,
            "away_team": away_team,
            "week": week,
            "season": season,
            "winner": None,
            "created_at": datetime.now(timezone.utc),
        }

        await self.collection.insert_one(game_doc)
        return Game(**game_doc)

    # ============================================
    # 📌 READ
    # ============================================

    async def get_by_id(self, game_id: str) -> Optional[Game]:
        """Obtiene un partido por ID"""
        doc = await self.collection.find_one({"_id": game_id})
        return Game(**doc) if doc else None

    async def get_by_ids(self, game_ids: list[str]) -> dict[str, Game]:
        """Obtiene varios partidos a la vez, indexados por ID"""
        if not game_ids:
            return {}

        cursor = self.collection.find({"_id": {"$in": game_ids}})
        docs = await cursor.to_list(length=None)
        return {doc["_id"]: Game(**doc) for doc in docs}

    async def get_by_period(self, week: int, season: int) -> list[Game]:
        """Todos los partidos de una semana, en orden de alta"""
        cursor = self.collection.find({
            "week": week,
            "season": season
        }).sort("created_at", 1)

        docs = await cursor.to_list(length=None)
        return [Game(**doc) for doc in docs]

    # ============================================
    # 📌 UPDATE
    # ============================================

    async def set_winner(self, game_id: str, winner: Optional[str]) -> Optional[Game]:
        """Registra (o borra, con None) el ganador de un partido"""
        result = await self.collection.find_one_and_update(
            {"_id": game_id},
            {"$set": {"winner": winner}},
            return_document=ReturnDocument.AFTER
        )

        return Game(**result) if result else None

    # ============================================
    # 📌 DELETE
    # ============================================

    async def delete_by_id(self, game_id: str) -> bool:
        """Elimina un partido. True si existía"""
        result = await self.collection.delete_one({"_id": game_id})
        return result.deleted_count > 0
