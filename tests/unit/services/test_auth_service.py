"""
Unit tests for AuthService
"""

import pytest
from unittest.mock import patch

from pickem.core.security import decode_access_token, hash_password, verify_password
from pickem.database import create_indexes
from pickem.services.auth_service import (
    AuthService,
    InvalidCredentialsError,
    UsernameTakenError
)


class TestAuthService:
    """Test suite for AuthService authentication logic."""

    @pytest.mark.asyncio
    async def test_register_new_user(self, test_db):
        service = AuthService(test_db)

        user, token = await service.register("alice", "s3cret-pass")

        assert user.username == "alice"
        assert user.is_admin is False
        assert user.picks == []
        assert user.password_hash != "s3cret-pass"

        payload = decode_access_token(token)
        assert payload["sub"] == user.id

        saved = await test_db["users"].find_one({"_id": user.id})
        assert saved is not None
        assert saved["username"] == "alice"

    @pytest.mark.asyncio
    async def test_register_strips_username(self, test_db):
        user, _ = await AuthService(test_db).register("  bob ", "s3cret-pass")
        assert user.username == "bob"

    @pytest.mark.asyncio
    async def test_register_duplicate_username(self, test_db):
        service = AuthService(test_db)
        await service.register("alice", "s3cret-pass")

        with pytest.raises(UsernameTakenError):
            await service.register("alice", "other-pass")

    @pytest.mark.asyncio
    async def test_register_race_hits_unique_index(self, test_db):
        """The unique index catches a duplicate the existence check missed."""
        await create_indexes(test_db)
        service = AuthService(test_db)
        await service.register("alice", "s3cret-pass")

        with patch.object(service.user_repo, "get_by_username", return_value=None):
            with pytest.raises(UsernameTakenError):
                await service.register("alice", "other-pass")

    @pytest.mark.asyncio
    async def test_authenticate(self, test_db):
        service = AuthService(test_db)
        registered, _ = await service.register("alice", "s3cret-pass")

        user, token = await service.authenticate("alice", "s3cret-pass")

        assert user.id == registered.id
        assert decode_access_token(token)["sub"] == registered.id

        saved = await test_db["users"].find_one({"_id": user.id})
        assert saved["last_login_at"] is not None

    @pytest.mark.asyncio
    async def test_authenticate_wrong_password(self, test_db):
        service = AuthService(test_db)
        await service.register("alice", "s3cret-pass")

        with pytest.raises(InvalidCredentialsError):
            await service.authenticate("alice", "wrong-pass")

    @pytest.mark.asyncio
    async def test_authenticate_unknown_user(self, test_db):
        with pytest.raises(InvalidCredentialsError):
            await AuthService(test_db).authenticate("nobody", "whatever")

    @pytest.mark.asyncio
    async def test_authenticate_disabled_user(self, test_db):
        service = AuthService(test_db)
        user, _ = await service.register("alice", "s3cret-pass")
        await test_db["users"].update_one({"_id": user.id}, {"$set": {"is_active": False}})

        with pytest.raises(InvalidCredentialsError):
            await service.authenticate("alice", "s3cret-pass")

    @pytest.mark.asyncio
    async def test_user_without_password_cannot_log_in(self, test_db, make_user):
        await make_user("u1", username="legacy")

        with pytest.raises(InvalidCredentialsError):
            await AuthService(test_db).authenticate("legacy", "")

    @pytest.mark.asyncio
    async def test_hashing_error_is_not_reported_as_taken_username(self, test_db):
        service = AuthService(test_db)

        with patch("pickem.services.auth_service.hash_password", side_effect=ValueError("too long")):
            with pytest.raises(ValueError, match="too long"):
                await service.register("alice", "s3cret-pass")

        assert await test_db["users"].count_documents({}) == 0

    @pytest.mark.asyncio
    async def test_authenticate_password_over_bcrypt_limit(self, test_db):
        service = AuthService(test_db)
        await service.register("alice", "ñ" * 36)

        user, _ = await service.authenticate("alice", "ñ" * 36)
        assert user.username == "alice"

        with pytest.raises(InvalidCredentialsError):
            await service.authenticate("alice", "ñ" * 40)


class TestVerifyPassword:
    """Password checks against bcrypt's 72-byte limit."""

    def test_multibyte_password_over_limit_never_matches(self):
        stored = hash_password("s3cret-pass")
        assert verify_password("ñ" * 40, stored) is False

    def test_password_at_limit(self):
        password = "ñ" * 36  # 72 bytes
        assert verify_password(password, hash_password(password)) is True
