from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer

    No method checks ownership; callers authorize before mutating.
    All methods raise StorageError on database failure.
    """

    @abstractmethod
    async def save(self, session: Session) -> None:
        """Insert or update a session keyed by id"""
        pass

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def get_by_user_and_device(
        self, user_id: UUID, device_id: str
    ) -> Optional[Session]:
        """Get the session of a user on a device"""
        pass

    @abstractmethod
    async def get_by_device_id(self, device_id: str) -> Optional[Session]:
        """Get session by device ID"""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> List[Session]:
        """Get all sessions for a user"""
        pass

    @abstractmethod
    async def delete_by_user_and_device(self, user_id: UUID, device_id: str) -> bool:
        """Delete the session of a user on a device. Returns True if a row was removed."""
        pass

    @abstractmethod
    async def delete_by_device_id(self, device_id: str) -> bool:
        """Delete session by device ID. Returns True if a row was removed."""
        pass

    @abstractmethod
    async def delete_by_user_id(self, user_id: UUID) -> int:
        """Delete every session of a user. Returns count."""
        pass

    @abstractmethod
    async def delete_all_except_device(self, user_id: UUID, device_id: str) -> int:
        """Delete all sessions for a user except the given device. Returns count."""
        pass

    @abstractmethod
    async def rotate(
        self, session_id: UUID, expected_iat: int, iat: int, exp: int
    ) -> bool:
        """Move iat/exp forward only if the stored iat still equals expected_iat"""
        pass
