"""
Seguridad: hash de contraseñas y manejo de JWT
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from pickem.core.config import get_settings

settings = get_settings()

# bcrypt no admite contraseñas de más de 72 bytes
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Genera el hash bcrypt de una contraseña"""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """Compara una contraseña con su hash. Sin hash, nunca coincide"""
    if not password_hash:
        return False
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))


def create_access_token(user_id: str, username: str) -> str:
    """
    Crea un JWT para que el usuario pueda hacer requests autenticados

    El JWT contiene el user_id y expira según JWT_EXPIRE_MINUTES
    """
    now = datetime.now(timezone.utc)
    expire = now + timedelta(minutes=settings.jwt_expire_minutes)

    payload = {
        "sub": user_id,      # Subject: el usuario
        "username": username,
        "exp": expire,       # Expiración
        "iat": now,          # Issued at (cuándo se creó)
    }

    # Firmo el token con nuestra clave secreta
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Optional[dict]:
    """
    Decodifica y valida un JWT

    Retorna el payload si es válido, None si está expirado o corrupto
    """
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        return None
