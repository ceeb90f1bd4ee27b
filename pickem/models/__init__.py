from .user import User, UserCreate, UserResponse
from .pick import Pick, PicksSubmission, PickResponse
from .game import Game, GameResponse
from .score import Score, SeasonTotal, RecomputeSummary
from .period import Period
from .leaderboard import LeaderboardEntry, StaleSeasonTotal

__all__ = [
    "User",
    "UserCreate",
    "UserResponse",
    "Pick",
    "PicksSubmission",
    "PickResponse",
    "Game",
    "GameResponse",
    "Score",
    "SeasonTotal",
    "RecomputeSummary",
    "Period",
    "LeaderboardEntry",
    "StaleSeasonTotal",
]
