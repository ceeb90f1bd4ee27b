"""
Controlador de picks - Endpoints para gestionar picks de usuarios
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from pickem.core.dependencies import Database, CurrentUser, CurrentPeriod
from pickem.services.pick_service import (
    PickService,
    UserNotFoundError,
    GameNotFoundError,
    InvalidPickError,
    PickLockedError
)
from pickem.models.game import GameResponse
from pickem.models.pick import PicksSubmission, PickResponse


router = APIRouter(prefix="/picks", tags=["picks"])


class MyPicksResponse(BaseModel):
    """Partidos de la semana actual con los picks del usuario."""
    week: int
    season: int
    games: list[GameResponse]
    picks: dict[str, str]


class UserPicksResponse(BaseModel):
    user_id: str
    username: str
    picks: dict[str, str]
    score: Optional[int] = None  # None si aún no se ha calculado


class AllPicksResponse(BaseModel):
    """Picks de todos los usuarios para la semana actual."""
    week: int
    season: int
    games: list[GameResponse]
    users: list[UserPicksResponse]


@router.get("", response_model=MyPicksResponse)
async def get_my_picks(
    user: CurrentUser,
    period: CurrentPeriod,
    db: Database
):
    """
    Obtener los partidos de la semana actual y los picks del usuario.
    """
    pick_service = PickService(db)

    try:
        games, picks = await pick_service.get_user_picks_for_period(user.id, period)
    except UserNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    return MyPicksResponse(
        week=period.week,
        season=period.season,
        games=[GameResponse.from_game(g) for g in games],
        picks=picks
    )


@router.post("", response_model=list[PickResponse])
async def submit_picks(
    submission: PicksSubmission,
    user: CurrentUser,
    db: Database
):
    """
    Reemplazar todos los picks del usuario.

    Los partidos que no vengan en el envío pierden su pick, salvo los que
    ya tienen ganador. Cambiar el pick de un partido decidido responde 409.
    """
    pick_service = PickService(db)

    try:
        picks = await pick_service.submit_picks(user.id, submission.picks)
    except (UserNotFoundError, GameNotFoundError) as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except InvalidPickError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except PickLockedError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )

    return [PickResponse(game_id=p.game_id, pick=p.pick) for p in picks]


@router.get("/all", response_model=AllPicksResponse)
async def get_all_picks(
    user: CurrentUser,
    period: CurrentPeriod,
    db: Database
):
    """
    Obtener los picks de todos los usuarios para la semana actual,
    junto con su puntuación de la semana.
    """
    pick_service = PickService(db)
    board = await pick_service.get_all_picks_for_period(period)

    scores = {s.user_id: s.score for s in board.scores}

    return AllPicksResponse(
        week=period.week,
        season=period.season,
        games=[GameResponse.from_game(g) for g in board.games],
        users=[
            UserPicksResponse(
                user_id=u.user_id,
                username=u.username,
                picks=u.picks,
                score=scores.get(u.user_id)
            )
            for u in board.users
        ]
    )
