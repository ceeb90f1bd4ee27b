"""
Controlador de autenticación - Registro, login y usuario actual
"""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field, field_validator

from pickem.core.dependencies import Database, CurrentUser
from pickem.core.security import MAX_PASSWORD_BYTES
from pickem.services.auth_service import (
    AuthService,
    InvalidCredentialsError,
    UsernameTakenError
)
from pickem.models.user import User, UserResponse

router = APIRouter(prefix="/auth", tags=["auth"])


# Cuerpo de registro y login
class CredentialsRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=32)
    password: str = Field(..., min_length=6)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        # El límite de bcrypt es en bytes, no en caracteres
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


# Respuesta con JWT
class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        username=user.username,
        created_at=user.created_at,
        is_admin=user.is_admin
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: CredentialsRequest,
    db: Database
):
    """
    Crea una cuenta nueva y devuelve un JWT.
    """
    auth_service = AuthService(db)

    try:
        user, token = await auth_service.register(request.username, request.password)
    except UsernameTakenError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )

    return AuthResponse(access_token=token, user=to_user_response(user))


@router.post("/login", response_model=AuthResponse)
async def login(
    request: CredentialsRequest,
    db: Database
):
    """
    Autentica con usuario y contraseña y devuelve un JWT.
    """
    auth_service = AuthService(db)

    try:
        user, token = await auth_service.authenticate(request.username, request.password)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e)
        )

    return AuthResponse(access_token=token, user=to_user_response(user))


@router.get("/me", response_model=UserResponse)
async def get_current_user(user: CurrentUser):
    """
    Devuelve el usuario actualmente autenticado.

    Requiere un JWT válido en la cabecera `Authorization`.
    """
    return to_user_response(user)
