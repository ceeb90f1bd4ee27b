from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class Game(BaseModel):
    """Partido de una semana concreta"""

    id: str = Field(..., alias="_id")

    home_team: str
    away_team: str

    week: int
    season: int

    winner: Optional[str] = None  # sin definir hasta que el admin lo registra

    created_at: datetime

    class Config:
        populate_by_name = True

    @property
    def teams(self) -> tuple[str, str]:
        return self.home_team, self.away_team

    @property
    def has_winner(self) -> bool:
        return bool(self.winner)


class GameResponse(BaseModel):
    id: str
    home_team: str
    away_team: str
    week: int
    season: int
    winner: Optional[str] = None

    @classmethod
    def from_game(cls, game: Game) -> "GameResponse":
        return cls(
            id=game.id,
            home_team=game.home_team,
            away_team=game.away_team,
            week=game.week,
            season=game.season,
            winner=game.winner
        )
