from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from .pick import Pick


class User(BaseModel):
    id: str = Field(..., alias="_id")
    username: str
    password_hash: Optional[str] = None

    # Una entrada por partido; se reemplaza entera en cada envío
    picks: list[Pick] = []

    created_at: datetime
    last_login_at: Optional[datetime] = None

    is_active: bool = True
    is_admin: bool = False

    class Config:
        populate_by_name = True


class UserCreate(BaseModel):
    """Datos para crear un usuario (la contraseña ya viene hasheada)"""

    username: str
    password_hash: str
    is_admin: bool = False


class UserResponse(BaseModel):
    """Usuario devuelto por la API (sin hash de contraseña)"""

    id: str
    username: str
    created_at: datetime
    is_admin: bool = False
