"""
Resolución de la semana y temporada actuales.

La semana se cuenta desde una fecha ancla fija: la semana `anchor_week`
empieza a medianoche UTC de `anchor_date` y cada 7 días se suma una.
No hay límites: antes del ancla salen semanas menores (incluso negativas)
y pasado el final real de la liga la cuenta sigue creciendo. La temporada
es siempre el año del reloj, así que un pick hecho a final de diciembre
para un partido de enero queda en la temporada anterior.

Si hace falta acotar la temporada, `ensure_week_in_season` lo hace como
una capa aparte; `resolve_current_period` nunca falla.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, Optional

from pickem.models.period import Period

ONE_WEEK = timedelta(days=7)

# Reloj inyectable: cualquier callable sin argumentos que devuelva un datetime
Clock = Callable[[], datetime]


class PeriodServiceError(Exception):
    """Base exception for period errors."""
    pass


class PeriodOutOfRangeError(PeriodServiceError):
    """Raised when a week falls outside the configured season length."""
    pass


def utc_now() -> datetime:
    """Reloj del sistema, siempre en UTC"""
    return datetime.now(timezone.utc)


def _as_utc(moment: datetime) -> datetime:
    # Los datetime sin zona se interpretan como UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def resolve_current_period(now: datetime, anchor_date: date, anchor_week: int) -> Period:
    """
    Calcula la (semana, temporada) de un instante.

    week = floor((now - ancla) / 7 días) + anchor_week
    season = año de `now`
    """
    now = _as_utc(now)
    anchor = datetime.combine(anchor_date, time.min, tzinfo=timezone.utc)

    # timedelta // timedelta redondea hacia abajo, también con valores negativos
    elapsed_weeks = (now - anchor) // ONE_WEEK

    return Period(week=elapsed_weeks + anchor_week, season=now.year)


def ensure_week_in_season(period: Period, max_week: Optional[int]) -> Period:
    """
    Política opcional de temporada acotada (semanas 1..max_week).

    Con max_week=None no valida nada.
    """
    if max_week is None:
        return period

    if not 1 <= period.week <= max_week:
        raise PeriodOutOfRangeError(
            f"Week {period.week} is outside season {period.season} (1-{max_week})"
        )

    return period
