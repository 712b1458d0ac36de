"""Credential verifier — registration and username/password checks.

Both "no such user" and "wrong password" raise the same
InvalidCredentials; which one happened is only logged.
"""

import asyncio
import uuid
from typing import Optional

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskledger.auth.password import hash_password, verify_dummy, verify_password
from taskledger.db.documents import DocumentStore
from taskledger.db.models import User
from taskledger.errors import DuplicateUsername, InvalidCredentials

logger = structlog.get_logger()


class CredentialService:
    """Creates users and checks their passwords."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = DocumentStore(db, User)

    async def register(self, username: str, password: str) -> User:
        """Create a user with a bcrypt hash of ``password``.

        Raises DuplicateUsername if the name is taken, including when a
        concurrent registration wins the unique index.
        """
        if await self.users.find_one({"username": username}):
            raise DuplicateUsername()

        # bcrypt is CPU-bound; run it off the event loop
        password_hash = await asyncio.to_thread(hash_password, password)
        try:
            user = await self.users.insert(
                username=username,
                password_hash=password_hash,
            )
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateUsername()

        logger.info("auth.registered", user_id=str(user.id), username=username)
        return user

    async def verify(self, username: str, password: str) -> User:
        """Return the user for a correct username/password pair."""
        user = await self.users.find_one({"username": username})
        if not user:
            await asyncio.to_thread(verify_dummy, password)
            logger.info("auth.login_failed", username=username, reason="unknown_user")
            raise InvalidCredentials()

        if not await asyncio.to_thread(verify_password, password, user.password_hash):
            logger.info("auth.login_failed", username=username, reason="bad_password")
            raise InvalidCredentials()

        return user

    async def get_principal(self, principal_id: uuid.UUID) -> Optional[User]:
        return await self.users.find_by_id(principal_id)
