"""
Controlador de Admin - Endpoints exclusivos para administradores
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Response, status
from pydantic import BaseModel, Field
from pymongo.errors import PyMongoError

from pickem.core.config import Settings
from pickem.core.dependencies import (
    AppSettings,
    CurrentAdmin,
    CurrentPeriod,
    Database,
    ResolvedPeriod,
    require_in_season
)
from pickem.services.game_service import (
    GameService,
    GameNotFoundError,
    InvalidGameError,
    InvalidWinnerError
)
from pickem.services.leaderboard_service import LeaderboardService
from pickem.services.score_service import ScoreService
from pickem.models.game import GameResponse
from pickem.models.leaderboard import StaleSeasonTotal
from pickem.models.period import Period
from pickem.models.score import RecomputeSummary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


# ============================================
# REQUEST SCHEMAS
# ============================================

class CreateGameRequest(BaseModel):
    """Request para dar de alta un partido"""
    home_team: str = Field(..., min_length=1)
    away_team: str = Field(..., min_length=1)
    week: Optional[int] = None  # Por defecto, la semana actual
    season: Optional[int] = None  # Por defecto, la temporada actual


class RecordWinnerRequest(BaseModel):
    """Request para registrar el ganador de un partido"""
    winner: str  # home_team o away_team del partido


class RecalculateScoresRequest(BaseModel):
    """Request para recalcular una semana a mano"""
    week: Optional[int] = None
    season: Optional[int] = None


class SeasonTotalsCheckResponse(BaseModel):
    season: int
    consistent: bool
    stale: list[StaleSeasonTotal]


def _store_failure(action: str) -> HTTPException:
    # El detalle del error de la BD solo va al log
    logger.exception(f"❌ {action} failed")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="No se pudo completar la operación"
    )


def _target_period(
    week: Optional[int],
    season: Optional[int],
    current: Period,
    settings: Settings
) -> Period:
    # Solo la semana actual usada por defecto pasa por SEASON_MAX_WEEK
    if week is None or season is None:
        current = require_in_season(current, settings)
    return Period(
        week=week if week is not None else current.week,
        season=season if season is not None else current.season
    )


# ============================================
# GAME ENDPOINTS
# ============================================

@router.get("/games", response_model=list[GameResponse])
async def get_current_games(
    admin: CurrentAdmin,
    period: CurrentPeriod,
    db: Database
):
    """
    Partidos de la semana actual.
    Solo administradores.
    """
    game_service = GameService(db)
    games = await game_service.get_games_for_period(period)
    return [GameResponse.from_game(g) for g in games]


@router.post("/games", response_model=GameResponse, status_code=status.HTTP_201_CREATED)
async def create_game(
    request: CreateGameRequest,
    admin: CurrentAdmin,
    period: ResolvedPeriod,
    settings: AppSettings,
    db: Database
):
    """
    Dar de alta un partido. Si no se indica semana/temporada, va a la actual.
    Con semana y temporada explícitas se pueden programar partidos de
    cualquier temporada.
    Solo administradores.
    """
    target = _target_period(request.week, request.season, period, settings)

    game_service = GameService(db)

    try:
        game = await game_service.add_game(request.home_team, request.away_team, target)
    except InvalidGameError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    return GameResponse.from_game(game)


@router.delete("/games/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_game(
    game_id: str,
    admin: CurrentAdmin,
    db: Database
):
    """
    Eliminar un partido. Si tenía ganador, se recalcula su semana.
    Solo administradores.
    """
    game_service = GameService(db)

    try:
        await game_service.delete_game(game_id)
    except GameNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except PyMongoError:
        raise _store_failure(f"Deleting game {game_id}")

    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================
# RESULT ENDPOINTS
# ============================================

@router.put("/games/{game_id}/winner", response_model=GameResponse)
async def record_game_winner(
    game_id: str,
    request: RecordWinnerRequest,
    admin: CurrentAdmin,
    db: Database
):
    """
    Registrar el ganador de un partido y recalcular puntuaciones.
    Solo administradores.

    Esto:
    1. Guarda el ganador del partido
    2. Recalcula la puntuación semanal de todos los usuarios
    3. Recalcula los totales de temporada
    """
    game_service = GameService(db)

    try:
        game = await game_service.on_game_winner_recorded(game_id, request.winner)
    except GameNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except InvalidWinnerError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except PyMongoError:
        raise _store_failure(f"Recording winner for game {game_id}")

    return GameResponse.from_game(game)


@router.delete("/games/{game_id}/winner", response_model=GameResponse)
async def clear_game_winner(
    game_id: str,
    admin: CurrentAdmin,
    db: Database
):
    """
    Borrar el ganador (por si se registró mal) y recalcular puntuaciones.
    Solo administradores.
    """
    game_service = GameService(db)

    try:
        game = await game_service.clear_winner(game_id)
    except GameNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except InvalidWinnerError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except PyMongoError:
        raise _store_failure(f"Clearing winner for game {game_id}")

    return GameResponse.from_game(game)


# ============================================
# SCORES RECALCULATION ENDPOINTS
# ============================================

@router.post("/recalculate-scores", response_model=RecomputeSummary)
async def recalculate_scores(
    request: RecalculateScoresRequest,
    admin: CurrentAdmin,
    period: ResolvedPeriod,
    settings: AppSettings,
    db: Database
):
    """
    Recalcular puntuaciones de una semana (por defecto la actual).
    Útil cuando se detectan inconsistencias.
    Solo administradores.
    """
    target = _target_period(request.week, request.season, period, settings)
    week, season = target.week, target.season

    score_service = ScoreService(db)

    try:
        return await score_service.recompute_scores(week, season)
    except PyMongoError:
        raise _store_failure(f"Recalculating week {week}/{season}")


@router.get("/season-totals/{season}/check", response_model=SeasonTotalsCheckResponse)
async def check_season_totals(
    season: int,
    admin: CurrentAdmin,
    db: Database
):
    """
    Comparar los totales de temporada guardados con la suma de las semanas.
    Solo administradores.
    """
    leaderboard_service = LeaderboardService(db)
    stale = await leaderboard_service.find_stale_season_totals(season)

    return SeasonTotalsCheckResponse(
        season=season,
        consistent=not stale,
        stale=stale
    )
