"""
GameService - Business logic for games and their results.

Recording a winner is the only thing that triggers score recomputation.
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from pickem.core.locks import ScopeLocks
from pickem.models.game import Game
from pickem.models.period import Period
from pickem.repositories.game_repository import GameRepository
from pickem.services.score_service import ScoreService

logger = logging.getLogger(__name__)


class GameServiceError(Exception):
    """Base exception for game service errors."""
    pass


class GameNotFoundError(GameServiceError):
    """Raised when game is not found."""
    pass


class InvalidWinnerError(GameServiceError):
    """Raised when the winner is not one of the game's teams."""
    pass


class InvalidGameError(GameServiceError):
    """Raised when game data is invalid."""
    pass


class GameService:
    def __init__(self, db: AsyncIOMotorDatabase, locks: Optional[ScopeLocks] = None):
        self.game_repo = GameRepository(db)
        self.score_service = ScoreService(db, locks)

    async def add_game(self, home_team: str, away_team: str, period: Period) -> Game:
        """Create a game for the given period."""
        home_team = home_team.strip()
        away_team = away_team.strip()

        if not home_team or not away_team:
            raise InvalidGameError("Both teams are required")
        if home_team == away_team:
            raise InvalidGameError("A team cannot play itself")

        game = await self.game_repo.create(home_team, away_team, period.week, period.season)
        logger.info(f"Game {game.id} added: {away_team} @ {home_team} (week {period.week}/{period.season})")
        return game

    async def get_game(self, game_id: str) -> Game:
        game = await self.game_repo.get_by_id(game_id)
        if not game:
            raise GameNotFoundError(f"Game {game_id} not found")
        return game

    async def get_games_for_period(self, period: Period) -> list[Game]:
        """Get all games of a week."""
        return await self.game_repo.get_by_period(period.week, period.season)

    async def on_game_winner_recorded(self, game_id: str, winner: str) -> Game:
        """
        Record a game's winner and recompute that week's scores.

        1. Validates the game exists and the winner is one of its teams
        2. Stores the winner
        3. Recomputes scores for the game's (week, season)

        Database errors from the recomputation are not caught here.
        """
        game = await self.get_game(game_id)

        if winner not in game.teams:
            raise InvalidWinnerError(
                f"Winner must be '{game.home_team}' or '{game.away_team}'"
            )

        updated = await self.game_repo.set_winner(game_id, winner)
        if not updated:
            raise GameNotFoundError(f"Game {game_id} not found")

        logger.info(f"Winner recorded for game {game_id}: {winner}")
        await self.score_service.recompute_scores(updated.week, updated.season)

        return updated

    async def clear_winner(self, game_id: str) -> Game:
        """Unset a game's winner (wrongly entered result) and recompute."""
        game = await self.get_game(game_id)

        if not game.has_winner:
            raise InvalidWinnerError(f"Game {game_id} has no winner recorded")

        updated = await self.game_repo.set_winner(game_id, None)
        if not updated:
            raise GameNotFoundError(f"Game {game_id} not found")

        logger.info(f"Winner cleared for game {game_id}")
        await self.score_service.recompute_scores(updated.week, updated.season)

        return updated

    async def delete_game(self, game_id: str) -> None:
        """
        Delete a game.

        If it already had a winner, the week is recomputed so the points
        it gave disappear from scores and season totals.
        """
        game = await self.get_game(game_id)

        deleted = await self.game_repo.delete_by_id(game_id)
        if not deleted:
            raise GameNotFoundError(f"Game {game_id} not found")

        logger.info(f"Game {game_id} deleted")

        if game.has_winner:
            await self.score_service.recompute_scores(game.week, game.season)
