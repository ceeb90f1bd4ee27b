from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class Score(BaseModel):
    """Aciertos de un usuario en una semana (uno por usuario/semana/temporada)"""

    user_id: str
    week: int
    season: int

    score: int = 0

    updated_at: Optional[datetime] = None

    class Config:
        populate_by_name = True


class SeasonTotal(BaseModel):
    """
    Total de un usuario en una temporada.

    Es un valor derivado: siempre la suma de sus Score de esa temporada.
    """

    user_id: str
    season: int

    total_score: int = 0

    updated_at: Optional[datetime] = None

    class Config:
        populate_by_name = True


class RecomputeSummary(BaseModel):
    """Resumen de una ejecución del recálculo de puntuaciones"""

    week: int
    season: int

    users_processed: int = 0
    games_in_scope: int = 0
    games_with_winner: int = 0

    # Picks que apuntan a partidos fuera de la semana recalculada
    unmatched_picks: int = 0
