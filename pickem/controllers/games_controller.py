"""
Controlador de partidos - Semana actual y sus partidos
"""

from fastapi import APIRouter
from pydantic import BaseModel

from pickem.core.dependencies import Database, CurrentUser, CurrentPeriod
from pickem.services.game_service import GameService
from pickem.models.game import GameResponse


router = APIRouter(prefix="/games", tags=["games"])


class WeekGamesResponse(BaseModel):
    """Semana actual y sus partidos."""
    week: int
    season: int
    games: list[GameResponse]


@router.get("", response_model=WeekGamesResponse)
async def get_current_games(
    user: CurrentUser,
    period: CurrentPeriod,
    db: Database
):
    """
    Obtener los partidos de la semana actual.
    """
    game_service = GameService(db)
    games = await game_service.get_games_for_period(period)

    return WeekGamesResponse(
        week=period.week,
        season=period.season,
        games=[GameResponse.from_game(g) for g in games]
    )
