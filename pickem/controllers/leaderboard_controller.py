"""
Controlador de leaderboards - Endpoints de clasificación

Las clasificaciones se calculan a partir de las puntuaciones semanales.
"""

from typing import Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel

from pickem.core.dependencies import (
    AppSettings,
    CurrentUser,
    Database,
    ResolvedPeriod,
    require_in_season
)
from pickem.services.leaderboard_service import LeaderboardService
from pickem.models.leaderboard import LeaderboardEntry


router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


class LeaderboardResponse(BaseModel):
    """Leaderboard con las entradas y la posición del usuario (opcional)."""
    season: int
    week: Optional[int] = None
    entries: list[LeaderboardEntry]
    user_position: Optional[LeaderboardEntry] = None


def _user_position(entries: list[LeaderboardEntry], user_id: str) -> Optional[LeaderboardEntry]:
    return next((e for e in entries if e.user_id == user_id), None)


@router.get("", response_model=LeaderboardResponse)
async def get_season_leaderboard(
    user: CurrentUser,
    period: ResolvedPeriod,
    settings: AppSettings,
    db: Database,
    season: Optional[int] = Query(None, description="Season (defaults to current)"),
    limit: int = Query(100, ge=1, le=500)
):
    """
    Obtener el leaderboard de una temporada (por defecto la actual).
    """
    if season is None:
        season = require_in_season(period, settings).season

    leaderboard_service = LeaderboardService(db)
    entries = await leaderboard_service.get_season_leaderboard(season, limit)

    return LeaderboardResponse(
        season=season,
        entries=entries,
        user_position=_user_position(entries, user.id)
    )


@router.get("/week", response_model=LeaderboardResponse)
async def get_week_leaderboard(
    user: CurrentUser,
    period: ResolvedPeriod,
    settings: AppSettings,
    db: Database,
    week: Optional[int] = Query(None, description="Week (defaults to current)"),
    season: Optional[int] = Query(None, description="Season (defaults to current)"),
    limit: int = Query(100, ge=1, le=500)
):
    """
    Obtener el leaderboard de una semana (por defecto la actual).
    """
    if week is None or season is None:
        current = require_in_season(period, settings)
        week = week if week is not None else current.week
        season = season if season is not None else current.season

    leaderboard_service = LeaderboardService(db)
    entries = await leaderboard_service.get_week_leaderboard(week, season, limit)

    return LeaderboardResponse(
        season=season,
        week=week,
        entries=entries,
        user_position=_user_position(entries, user.id)
    )
