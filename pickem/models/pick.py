from pydantic import BaseModel, Field


class Pick(BaseModel):
    """Elección de un usuario para un partido"""

    game_id: str
    pick: str  # etiqueta del equipo elegido

    class Config:
        populate_by_name = True


class PicksSubmission(BaseModel):
    """Envío completo de picks: game_id -> equipo elegido"""

    picks: dict[str, str] = Field(default_factory=dict)


class PickResponse(BaseModel):
    game_id: str
    pick: str
