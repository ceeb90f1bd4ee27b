"""
🔌 Database Connection Setup - MongoDB

Configuración centralizada para conectar a MongoDB
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from pickem.core.config import get_settings

logger = logging.getLogger(__name__)


class Database:
    """Singleton para la conexión a MongoDB"""

    client: Optional[AsyncIOMotorClient] = None
    db: Optional[AsyncIOMotorDatabase] = None

    @classmethod
    async def connect(cls):
        """Conecta a MongoDB"""
        if cls.client is None:
            settings = get_settings()

            cls.client = AsyncIOMotorClient(
                settings.mongodb_uri,
                maxPoolSize=10,
                minPoolSize=2,
            )
            cls.db = cls.client[settings.mongodb_db_name]

            # Test de conexión
            await cls.client.admin.command("ping")
            logger.info(f"✅ Connected to MongoDB: {settings.mongodb_db_name}")

    @classmethod
    async def disconnect(cls):
        """Cierra la conexión"""
        if cls.client is not None:
            cls.client.close()
            cls.client = None
            cls.db = None
            logger.info("❌ Disconnected from MongoDB")

    @classmethod
    def get_db(cls) -> AsyncIOMotorDatabase:
        """Retorna la instancia de la base de datos"""
        if cls.db is None:
            raise RuntimeError("Database not connected. Call Database.connect() first.")
        return cls.db


# ============================================
# 🎯 DEPENDENCY para FastAPI
# ============================================

async def get_database() -> AsyncIOMotorDatabase:
    """FastAPI dependency para inyectar la DB"""
    return Database.get_db()


# ============================================
# 🏗️ CREAR ÍNDICES (run once al deployment)
# ============================================

async def create_indexes(db: Optional[AsyncIOMotorDatabase] = None):
    """
    Crea los índices necesarios.

    Los índices únicos de scores y season_totals son los que garantizan
    un solo registro por (usuario, semana, temporada) y (usuario, temporada).
    """
    db = db if db is not None else Database.get_db()

    # Índices para users
    await db.users.create_index("username", unique=True)

    # Índices para games
    await db.games.create_index([("season", 1), ("week", 1)])

    # Índices para scores
    await db.scores.create_index(
        [("user_id", 1), ("season", 1), ("week", 1)],
        unique=True
    )
    await db.scores.create_index([("season", 1), ("week", 1)])

    # Índices para season_totals
    await db.season_totals.create_index(
        [("user_id", 1), ("season", 1)],
        unique=True
    )
    await db.season_totals.create_index([("season", 1), ("total_score", -1)])

    logger.info("✅ Indexes created successfully")
