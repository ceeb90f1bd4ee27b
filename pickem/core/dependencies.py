"""
Dependencies de FastAPI para autenticacion, reloj e inyeccion de BD
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from motor.motor_asyncio import AsyncIOMotorDatabase

from pickem.core.config import Settings, get_settings
from pickem.core.security import decode_access_token
from pickem.database import get_database
from pickem.repositories.user_repository import UserRepository
from pickem.models.period import Period
from pickem.models.user import User
from pickem.services.period_service import (
    Clock as ClockFn,
    PeriodOutOfRangeError,
    ensure_week_in_season,
    resolve_current_period,
    utc_now,
)

# Esquema de seguridad: espera un header "Authorization: Bearer <token>"
security = HTTPBearer()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)]
) -> User:
    """
    Jugador autenticado a partir del JWT de la cabecera.

    401 si el token no vale o el usuario ya no existe,
    403 si la cuenta está deshabilitada.
    """
    payload = decode_access_token(credentials.credentials) or {}
    user_id = payload.get("sub")
    if not user_id:
        raise _unauthorized("Token invalido o expirado")

    user = await UserRepository(db).get_by_id(user_id)
    if user is None:
        raise _unauthorized("Usuario no encontrado")

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cuenta de usuario deshabilitada",
        )

    return user


async def get_current_admin(
    user: Annotated[User, Depends(get_current_user)]
) -> User:
    """Como get_current_user, pero exige is_admin"""
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Se requieren permisos de administrador",
        )
    return user


def get_clock() -> ClockFn:
    """Reloj usado para calcular la semana actual (se sobrescribe en tests)"""
    return utc_now


def get_resolved_period(
    clock: Annotated[ClockFn, Depends(get_clock)],
    settings: Annotated[Settings, Depends(get_settings)]
) -> Period:
    """Semana y temporada según el reloj, sin comprobar los límites"""
    return resolve_current_period(
        clock(),
        settings.period_anchor_date,
        settings.period_anchor_week
    )


def require_in_season(period: Period, settings: Settings) -> Period:
    """
    Aplica SEASON_MAX_WEEK a la semana actual.

    Fuera de rango responde 409. Sin SEASON_MAX_WEEK no limita nada.
    """
    try:
        return ensure_week_in_season(period, settings.season_max_week)
    except PeriodOutOfRangeError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )


def get_current_period(
    period: Annotated[Period, Depends(get_resolved_period)],
    settings: Annotated[Settings, Depends(get_settings)]
) -> Period:
    """Semana y temporada actuales, dentro de la temporada configurada"""
    return require_in_season(period, settings)


# Alias de tipos para que se vea mas limpio en los endpoints
CurrentUser = Annotated[User, Depends(get_current_user)]
CurrentAdmin = Annotated[User, Depends(get_current_admin)]
# Para endpoints cuyo ámbito es siempre la semana en curso
CurrentPeriod = Annotated[Period, Depends(get_current_period)]
# Para endpoints que solo usan la semana actual como valor por defecto
ResolvedPeriod = Annotated[Period, Depends(get_resolved_period)]
AppSettings = Annotated[Settings, Depends(get_settings)]
Clock = Annotated[ClockFn, Depends(get_clock)]
Database = Annotated[AsyncIOMotorDatabase, Depends(get_database)]
