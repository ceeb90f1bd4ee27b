"""
Controlador de salud - Endpoint de comprobación del servicio
"""

import logging

from fastapi import APIRouter
from pydantic import BaseModel
from pymongo.errors import PyMongoError

from pickem.core.dependencies import ResolvedPeriod
from pickem.database import Database

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Respuesta del chequeo de estado."""
    status: str
    database: str
    week: int
    season: int


@router.get("/health", response_model=HealthResponse)
async def health_check(period: ResolvedPeriod):
    """
    Endpoint de verificación de estado.

    Hace ping a la base de datos y devuelve la semana en curso,
    aunque quede fuera de la temporada configurada.
    """
    if Database.db is None:
        db_status = "disconnected"
    else:
        try:
            await Database.db.command("ping")
            db_status = "connected"
        except PyMongoError:
            logger.exception("❌ Database ping failed")
            db_status = "error"

    return HealthResponse(
        status="ok" if db_status == "connected" else "degraded",
        database=db_status,
        week=period.week,
        season=period.season
    )
