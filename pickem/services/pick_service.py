"""
PickService - Business logic for picks.

A user's picks are stored on the user document and replaced wholesale on
every submission. Picks on games with a recorded winner are frozen.
"""

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import BaseModel

from pickem.models.game import Game
from pickem.models.period import Period
from pickem.models.pick import Pick
from pickem.models.score import Score
from pickem.repositories.game_repository import GameRepository
from pickem.repositories.score_repository import ScoreRepository
from pickem.repositories.user_repository import UserRepository


class PickServiceError(Exception):
    """Base exception for pick service errors."""
    pass


class UserNotFoundError(PickServiceError):
    """Raised when user is not found."""
    pass


class GameNotFoundError(PickServiceError):
    """Raised when a picked game is not found."""
    pass


class InvalidPickError(PickServiceError):
    """Raised when pick data is invalid."""
    pass


class PickLockedError(PickServiceError):
    """Raised when changing a pick on a game whose winner is recorded."""
    pass


class UserPicks(BaseModel):
    """Picks de un usuario restringidos a una semana"""

    user_id: str
    username: str
    picks: dict[str, str]  # game_id -> pick


class PeriodPicks(BaseModel):
    """Partidos de una semana con los picks de todos y sus puntuaciones"""

    period: Period
    games: list[Game]
    users: list[UserPicks]
    scores: list[Score]


class PickService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.user_repo = UserRepository(db)
        self.game_repo = GameRepository(db)
        self.score_repo = ScoreRepository(db)

    async def submit_picks(self, user_id: str, picks: dict[str, str]) -> list[Pick]:
        """
        Replace all of a user's picks.

        Validates:
        - User exists
        - Every game exists
        - Every pick is one of that game's teams
        - Picks on games with a recorded winner are unchanged

        Nothing is merged: games left out of the submission lose their pick,
        except decided games, whose existing pick is kept.
        """
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(f"User {user_id} not found")

        existing = {p.game_id: p.pick for p in user.picks}
        games = await self.game_repo.get_by_ids(list(set(picks) | set(existing)))

        new_picks = []
        for game_id, label in picks.items():
            game = games.get(game_id)
            if not game:
                raise GameNotFoundError(f"Game {game_id} not found")
            if label not in game.teams:
                raise InvalidPickError(
                    f"Pick for game {game_id} must be '{game.home_team}' or '{game.away_team}'"
                )
            if game.has_winner and existing.get(game_id) != label:
                raise PickLockedError(f"Game {game_id} already has a winner")
            new_picks.append(Pick(game_id=game_id, pick=label))

        # Los picks de partidos ya decididos no se pierden al reenviar
        for game_id, label in existing.items():
            game = games.get(game_id)
            if game_id not in picks and game and game.has_winner:
                new_picks.append(Pick(game_id=game_id, pick=label))

        user = await self.user_repo.replace_picks(user_id, new_picks)
        if not user:
            raise UserNotFoundError(f"User {user_id} not found")

        return user.picks

    async def get_user_picks_for_period(
        self,
        user_id: str,
        period: Period
    ) -> tuple[list[Game], dict[str, str]]:
        """
        Get the period's games and the user's picks for them.

        Returns: (games, {game_id: pick})
        """
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(f"User {user_id} not found")

        games = await self.game_repo.get_by_period(period.week, period.season)
        return games, self._picks_for_games(user.picks, games)

    async def get_all_picks_for_period(self, period: Period) -> PeriodPicks:
        """Get every user's picks and the recorded scores for a period."""
        games = await self.game_repo.get_by_period(period.week, period.season)
        users = await self.user_repo.get_all()
        scores = await self.score_repo.get_by_period(period.week, period.season)

        return PeriodPicks(
            period=period,
            games=games,
            users=[
                UserPicks(
                    user_id=u.id,
                    username=u.username,
                    picks=self._picks_for_games(u.picks, games)
                )
                for u in users
            ],
            scores=scores
        )

    def _picks_for_games(
        self,
        picks: list[Pick],
        games: list[Game]
    ) -> dict[str, str]:
        game_ids = {g.id for g in games}
        return {p.game_id: p.pick for p in picks if p.game_id in game_ids}
