"""
AuthService - Username/password registration and login.
"""

import logging

from motor.motor_asyncio import AsyncIOMotorDatabase

from pickem.core.security import create_access_token, hash_password, verify_password
from pickem.repositories.user_repository import UserRepository, UsernameExistsError
from pickem.models.user import User, UserCreate

logger = logging.getLogger(__name__)


class AuthServiceError(Exception):
    """Base exception for auth service errors."""
    pass


class UsernameTakenError(AuthServiceError):
    """Raised when registering an existing username."""
    pass


class InvalidCredentialsError(AuthServiceError):
    """Raised when username/password do not match an active user."""
    pass


class AuthService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.user_repo = UserRepository(db)

    async def register(self, username: str, password: str, is_admin: bool = False) -> tuple[User, str]:
        """
        Create a new account.

        Returns: (user, jwt_token)
        Raises: UsernameTakenError if the username exists
        """
        username = username.strip()

        if await self.user_repo.get_by_username(username):
            raise UsernameTakenError(f"Username {username} is already taken")

        password_hash = hash_password(password)

        try:
            user = await self.user_repo.create(UserCreate(
                username=username,
                password_hash=password_hash,
                is_admin=is_admin
            ))
        except UsernameExistsError as e:
            # Registro concurrente con el mismo nombre
            raise UsernameTakenError(str(e))

        logger.info(f"User registered: {username}")
        return user, create_access_token(user.id, user.username)

    async def authenticate(self, username: str, password: str) -> tuple[User, str]:
        """
        Log in with username and password.

        Returns: (user, jwt_token)
        Raises: InvalidCredentialsError on failure
        """
        user = await self.user_repo.get_by_username(username.strip())

        if user is None or not verify_password(password, user.password_hash):
            logger.warning(f"Failed login for {username}")
            raise InvalidCredentialsError("Invalid username or password")

        if not user.is_active:
            raise InvalidCredentialsError("User account is disabled")

        await self.user_repo.update_last_login(user.id)

        return user, create_access_token(user.id, user.username)
