"""SQL-backed user account store with bcrypt password hashes."""

import asyncio
import logging
from uuid import UUID

from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from breathewatch.config import settings
from breathewatch.data.base import STORE_ERRORS
from breathewatch.engine.validation import (
    check_string,
    validate_age,
    validate_location,
    validate_password,
    validate_profile_description,
    validate_username,
)
from breathewatch.errors import InvalidArgument, NotFound, UpstreamUnavailable
from breathewatch.models.db import UserRow
from breathewatch.models.user import User

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.password_hash_rounds
)

INVALID_CREDENTIALS = "Either the username or password is invalid."


def _to_user(row: UserRow) -> User:
    return User(
        id=row.id,
        username=row.username,
        first_name=row.first_name,
        last_name=row.last_name,
        borough=row.borough,
        neighborhood=row.neighborhood,
        age=row.age,
        profile_description=row.profile_description or "",
        is_profile_configured=bool(row.is_profile_configured),
        created_at=row.created_at,
    )


class SQLUserStore:
    """User accounts in the `users` table.

    bcrypt hashing and verification run in a worker thread.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        password_context: CryptContext | None = None,
    ):
        self.session_factory = session_factory
        self.password_context = password_context or pwd_context

    async def create_user(
        self, first_name: str, last_name: str, username: str, password: str
    ) -> User:
        first_name = check_string(first_name, "First name")
        last_name = check_string(last_name, "Last name")
        username = validate_username(username)
        password = validate_password(password)

        if await self._find_by_username(username) is not None:
            raise InvalidArgument("Username already exists.")

        password_hash = await asyncio.to_thread(self.password_context.hash, password)
        row = UserRow(
            username=username,
            first_name=first_name,
            last_name=last_name,
            password_hash=password_hash,
            profile_description="",
            is_profile_configured=False,
        )
        try:
            async with self.session_factory() as session:
                session.add(row)
                await session.commit()
                await session.refresh(row)
                user = _to_user(row)
        except IntegrityError as e:
            raise InvalidArgument("Username already exists.") from e
        except STORE_ERRORS as e:
            raise UpstreamUnavailable(f"User store unavailable: {e}") from e

        logger.info("Created user %s", username)
        return user

    async def check_user(self, username: str, password: str) -> User:
        """Return the user if the credentials match, else raise InvalidArgument."""
        username = validate_username(username)
        if not isinstance(password, str) or not password:
            raise InvalidArgument(INVALID_CREDENTIALS)

        row = await self._find_by_username(username)
        if row is None:
            raise InvalidArgument(INVALID_CREDENTIALS)
        if not await asyncio.to_thread(self.password_context.verify, password, row.password_hash):
            logger.info("Failed login for %s", username)
            raise InvalidArgument(INVALID_CREDENTIALS)
        return _to_user(row)

    async def get_user(self, user_id: UUID) -> User:
        try:
            async with self.session_factory() as session:
                row = await session.get(UserRow, user_id)
        except STORE_ERRORS as e:
            raise UpstreamUnavailable(f"User store unavailable: {e}") from e
        if row is None:
            raise NotFound("User not found.")
        return _to_user(row)

    async def update_profile(
        self,
        user_id: UUID,
        borough: str,
        neighborhood: str,
        age: int,
        profile_description: str | None = "",
    ) -> User:
        """Set the home neighborhood profile and mark it configured."""
        borough = validate_location(borough, "Borough")
        neighborhood = validate_location(neighborhood, "Neighborhood")
        age = validate_age(age)
        profile_description = validate_profile_description(profile_description)

        try:
            async with self.session_factory() as session:
                row = await session.get(UserRow, user_id)
                if row is None:
                    raise NotFound("User not found.")
                row.borough = borough
                row.neighborhood = neighborhood
                row.age = age
                row.profile_description = profile_description
                row.is_profile_configured = True
                await session.commit()
                await session.refresh(row)
                return _to_user(row)
        except STORE_ERRORS as e:
            raise UpstreamUnavailable(f"User store unavailable: {e}") from e

    async def _find_by_username(self, username: str) -> UserRow | None:
        try:
            async with self.session_factory() as session:
                return (await session.scalars(select(UserRow).where(UserRow.username == username))).first()
        except STORE_ERRORS as e:
            raise UpstreamUnavailable(f"User store unavailable: {e}") from e
