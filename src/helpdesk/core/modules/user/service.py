from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from helpdesk.core.core import Service
from helpdesk.core.db import store_errors
from helpdesk.core.modules.user.models import User
from helpdesk.core.modules.user.password import hash_password, verify_password
from helpdesk.core.modules.user.validators import normalize_email
from helpdesk.errors import DuplicateUserError

logger = structlog.get_logger(__name__)


class UserService(Service):
    """Credential store backed by the users collection."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")

    async def get_user(self, user_id: UUID) -> User | None:
        """Get user by ID, or None if the account no longer exists."""
        with store_errors("find user"):
            doc = await self._collection.find_one({"_id": user_id})
        return User.model_validate(doc) if doc else None

    async def get_user_by_email(self, email: str) -> User | None:
        with store_errors("find user by email"):
            doc = await self._collection.find_one({"email": normalize_email(email)})
        return User.model_validate(doc) if doc else None

    async def has_email(self, email: str) -> bool:
        """Check if an account with this email exists."""
        return await self.get_user_by_email(email) is not None

    async def create_user(self, name: str, email: str, password: str) -> User:
        """Create user with hashed password, refusing duplicate emails."""
        if await self.has_email(email):
            raise DuplicateUserError

        user = User(name=name.strip(), email=normalize_email(email), password_hash=hash_password(password))
        with store_errors("insert user"):
            try:
                await self._collection.insert_one(user.to_mongo())
            except DuplicateKeyError as e:
                # Concurrent registration won the unique index
                raise DuplicateUserError from e
        return user

    async def authenticate(self, email: str, password: str) -> User | None:
        """Return the user when the password matches, otherwise None."""
        user = await self.get_user_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            return None
        return user

    async def on_start(self) -> None:
        """Create the unique email index."""
        await self._collection.create_index([("email", 1)], unique=True)
        logger.debug("user_service_started")
