from .user_repository import UserRepository
from .game_repository import GameRepository
from .score_repository import ScoreRepository, SeasonTotalRepository

__all__ = [
    "UserRepository",
    "GameRepository",
    "ScoreRepository",
    "SeasonTotalRepository",
]
