from pydantic import BaseModel


class Period(BaseModel):
    """Par (semana, temporada) que delimita partidos y puntuaciones"""

    week: int
    season: int

    class Config:
        frozen = True
