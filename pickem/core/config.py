"""
Configuración de la app cargada desde variables de entorno (.env)

Todo lo que varía entre desarrollo/producción va aquí
"""

import logging
from datetime import date
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str  # "mongodb://localhost:27017"
    mongodb_db_name: str = "football_picks"

    # JWT - para firmar los tokens de autenticación
    jwt_secret: str  # Una cadena larga y aleatoria
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60 * 24 * 7  # Los tokens expiran en 7 días

    # Coste del hash de contraseñas (bajarlo solo en tests)
    bcrypt_rounds: int = 12

    # ==================== Semanas y temporadas ====================
    # La semana `period_anchor_week` empieza a medianoche UTC de `period_anchor_date`.
    # A partir de ahí cada 7 días se suma una semana, sin límite superior.
    period_anchor_date: date = date(2024, 9, 17)
    period_anchor_week: int = 3

    # Si se define, las semanas fuera de 1..season_max_week se rechazan
    # en la capa HTTP. El cálculo de la semana no se ve afectado.
    season_max_week: Optional[int] = None

    # App
    app_env: str = "development"  # o "production"
    debug: bool = False
    log_level: str = "INFO"

    # CORS - de dónde pueden venir los requests
    cors_origins: str = "http://localhost:3000"  # URLs separadas por coma

    class Config:
        env_file = ".env"  # Lee desde el archivo .env
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignora campos extras del .env que no estén en el modelo


@lru_cache()
def get_settings() -> Settings:
    """Retorna la instancia de configuración (cacheada para no releerla)"""
    return Settings()


def configure_logging(settings: Settings) -> None:
    """Configura el logging raíz según LOG_LEVEL"""
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
