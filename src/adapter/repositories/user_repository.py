import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.errors import StorageError
from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User

logger = logging.getLogger(__name__)


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        try:
            result = await self.session.exec(stmt)
            return result.one_or_none()
        except SQLAlchemyError as exc:
            logger.exception("Error finding user %s", user_id)
            raise StorageError("Database error during user lookup") from exc

    async def get_by_login_or_email(
        self, login_or_email: str, include_deleted: bool = False
    ) -> Optional[User]:
        """Get user by login or email"""
        stmt = select(User).where(
            or_(User.login == login_or_email, User.email == login_or_email)
        )
        if not include_deleted:
            stmt = stmt.where(User.deleted_at == None)  # noqa: E711
        try:
            result = await self.session.exec(stmt)
            return result.first()
        except SQLAlchemyError as exc:
            logger.exception("Error finding user by login or email")
            raise StorageError("Database error during user lookup") from exc

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get non-deleted user by email"""
        return await self._first(
            select(User).where(User.email == email), "user lookup by email"
        )

    async def get_by_confirmation_code(self, code: str) -> Optional[User]:
        """Get non-deleted user by email confirmation code"""
        return await self._first(
            select(User).where(User.confirmation_code == code),
            "user lookup by confirmation code",
        )

    async def get_by_recovery_code_hash(self, code_hash: str) -> Optional[User]:
        """Get non-deleted user by recovery code hash"""
        return await self._first(
            select(User).where(User.recovery_code_hash == code_hash),
            "user lookup by recovery code",
        )

    async def create(self, user: User) -> User:
        """Create a new user"""
        return await self._persist(user, "user creation")

    async def update(self, user: User) -> User:
        """Update existing user"""
        return await self._persist(user, "user update")

    async def _persist(self, user: User, operation: str) -> User:
        try:
            self.session.add(user)
            await self.session.flush()
            await self.session.refresh(user)
            return user
        except SQLAlchemyError as exc:
            logger.exception("Error during %s", operation)
            raise StorageError(f"Database error during {operation}") from exc

    async def _first(self, stmt, operation: str) -> Optional[User]:
        stmt = stmt.where(User.deleted_at == None)  # noqa: E711
        try:
            result = await self.session.exec(stmt)
            return result.first()
        except SQLAlchemyError as exc:
            logger.exception("Error during %s", operation)
            raise StorageError(f"Database error during {operation}") from exc
