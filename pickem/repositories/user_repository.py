"""
UserRepository - MongoDB access for users collection.
"""

from datetime import datetime, timezone
from typing import Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from pickem.models.pick import Pick
from pickem.models.user import User, UserCreate


class UsernameExistsError(Exception):
    """Raised when the unique index on users.username rejects an insert."""
    pass


class UserRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["users"]

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        doc = await self.collection.find_one({"_id": user_id})
        return User(**doc) if doc else None

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        doc = await self.collection.find_one({"username": username})
        return User(**doc) if doc else None

    async def get_all(self) -> list[User]:
        """Get every user, in creation order."""
        cursor = self.collection.find({}).sort("created_at", 1)
        docs = await cursor.to_list(length=None)
        return [User(**doc) for doc in docs]

    async def get_usernames(self, user_ids: list[str]) -> dict[str, str]:
        """Map user IDs to usernames (missing users are left out)."""
        if not user_ids:
            return {}

        cursor = self.collection.find(
            {"_id": {"$in": user_ids}},
            {"username": 1}
        )
        docs = await cursor.to_list(length=None)
        return {doc["_id"]: doc["username"] for doc in docs}

    async def create(self, user_data: UserCreate) -> User:
        """
        Create a new user.

        Raises UsernameExistsError if the username is already taken.
        """
        now = datetime.now(timezone.utc)

        user_doc = {
            "_id": str(ObjectId()),
            "username": user_data.username,
            "password_hash": user_data.password_hash,
            "picks": [],
            "created_at": now,
            "last_login_at": None,
            "is_active": True,
            "is_admin": user_data.is_admin,
        }

        try:
            await self.collection.insert_one(user_doc)
        except DuplicateKeyError:
            raise UsernameExistsError(f"Username {user_data.username} already exists")

        return User(**user_doc)

    async def update_last_login(self, user_id: str) -> Optional[User]:
        """Update user's last login timestamp."""
        now = datetime.now(timezone.utc)

        result = await self.collection.find_one_and_update(
            {"_id": user_id},
            {"$set": {"last_login_at": now}},
            return_document=ReturnDocument.AFTER
        )

        return User(**result) if result else None

    async def replace_picks(self, user_id: str, picks: list[Pick]) -> Optional[User]:
        """Overwrite the user's whole pick list."""
        result = await self.collection.find_one_and_update(
            {"_id": user_id},
            {"$set": {"picks": [p.model_dump() for p in picks]}},
            return_document=ReturnDocument.AFTER
        )

        return User(**result) if result else None

    async def delete_by_id(self, user_id: str) -> bool:
        """Delete a user. Returns True if something was deleted."""
        result = await self.collection.delete_one({"_id": user_id})
        return result.deleted_count > 0
