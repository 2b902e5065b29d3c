import logging
from datetime import UTC, datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.errors import StorageError
from src.app.repositories.session_repository import ISessionRepository
from src.domain.entities import Session

logger = logging.getLogger(__name__)

_UPSERT_COLUMNS = ("device_name", "device_id", "ip", "iat", "exp", "updated_at")


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _insert(self):
        table = Session.__table__
        if self.session.bind is not None and self.session.bind.dialect.name == "postgresql":
            return pg_insert(table)
        return sqlite_insert(table)

    async def save(self, session_obj: Session) -> None:
        """Upsert by id; on conflict only the mutable columns change"""
        values = {
            "id": session_obj.id,
            "user_id": session_obj.user_id,
            "device_id": session_obj.device_id,
            "device_name": session_obj.device_name,
            "ip": session_obj.ip,
            "iat": session_obj.iat,
            "exp": session_obj.exp,
            "created_at": session_obj.created_at,
            "updated_at": session_obj.updated_at,
        }
        stmt = self._insert().values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=["id"],
            set_={column: stmt.excluded[column] for column in _UPSERT_COLUMNS},
        )
        try:
            await self.session.execute(stmt)
            await self.session.flush()
        except SQLAlchemyError as exc:
            logger.exception("Error saving session %s", session_obj.id)
            raise StorageError("Database error during session save") from exc

    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        stmt = select(Session).where(Session.id == session_id)
        return await self._one_or_none(stmt, "session lookup")

    async def get_by_user_and_device(
        self, user_id: UUID, device_id: str
    ) -> Optional[Session]:
        """Get the session of a user on a device"""
        stmt = select(Session).where(
            Session.user_id == user_id, Session.device_id == device_id
        )
        return await self._one_or_none(stmt, "session lookup")

    async def get_by_device_id(self, device_id: str) -> Optional[Session]:
        """Get session by device ID"""
        stmt = select(Session).where(Session.device_id == device_id)
        return await self._one_or_none(stmt, "session lookup")

    async def get_by_user_id(self, user_id: UUID) -> List[Session]:
        """Get all sessions for a user, oldest first"""
        stmt = (
            select(Session)
            .where(Session.user_id == user_id)
            .order_by(Session.created_at)
        )
        try:
            result = await self.session.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as exc:
            logger.exception("Error listing sessions for user %s", user_id)
            raise StorageError("Database error during session lookup") from exc

    async def delete_by_user_and_device(self, user_id: UUID, device_id: str) -> bool:
        """Delete the session of a user on a device"""
        stmt = delete(Session).where(
            Session.user_id == user_id, Session.device_id == device_id
        )
        return await self._rowcount(stmt, "session deletion") > 0

    async def delete_by_device_id(self, device_id: str) -> bool:
        """Delete session by device ID"""
        stmt = delete(Session).where(Session.device_id == device_id)
        return await self._rowcount(stmt, "session deletion") > 0

    async def delete_by_user_id(self, user_id: UUID) -> int:
        """Delete every session of a user"""
        stmt = delete(Session).where(Session.user_id == user_id)
        return await self._rowcount(stmt, "user session deletion")

    async def delete_all_except_device(self, user_id: UUID, device_id: str) -> int:
        """Delete every session for a user except the given device"""
        stmt = delete(Session).where(
            Session.user_id == user_id, Session.device_id != device_id
        )
        return await self._rowcount(stmt, "multiple session deletion")

    async def rotate(
        self, session_id: UUID, expected_iat: int, iat: int, exp: int
    ) -> bool:
        """Compare-and-swap on iat. False means a concurrent rotation won."""
        stmt = (
            update(Session)
            .where(Session.id == session_id, Session.iat == expected_iat)
            .values(iat=iat, exp=exp, updated_at=datetime.now(UTC))
        )
        return await self._rowcount(stmt, "session rotation") == 1

    async def _one_or_none(self, stmt, operation: str) -> Optional[Session]:
        try:
            result = await self.session.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.exception("Error during %s", operation)
            raise StorageError(f"Database error during {operation}") from exc

    async def _rowcount(self, stmt, operation: str) -> int:
        try:
            result = await self.session.execute(stmt)
            await self.session.flush()
            return result.rowcount
        except SQLAlchemyError as exc:
            logger.exception("Error during %s", operation)
            raise StorageError(f"Database error during {operation}") from exc
