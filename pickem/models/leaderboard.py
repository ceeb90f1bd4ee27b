from typing import Optional
from pydantic import BaseModel


class LeaderboardEntry(BaseModel):
    """Entrada en una tabla de clasificación (resultado agregado)"""

    rank: int
    user_id: str
    username: str

    total_points: int

    season: int
    week: Optional[int] = None  # None para la clasificación de temporada

    class Config:
        populate_by_name = True


class StaleSeasonTotal(BaseModel):
    """Usuario cuyo total cacheado no coincide con la suma de sus Score"""

    user_id: str
    season: int
    cached_total: Optional[int] = None
    derived_total: int
