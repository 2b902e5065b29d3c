from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID, including soft-deleted users"""
        pass

    @abstractmethod
    async def get_by_login_or_email(
        self, login_or_email: str, include_deleted: bool = False
    ) -> Optional[User]:
        """Get a user whose login or email matches, skipping deleted users by default"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a non-deleted user by email"""
        pass

    @abstractmethod
    async def get_by_confirmation_code(self, code: str) -> Optional[User]:
        """Get a non-deleted user holding this email confirmation code"""
        pass

    @abstractmethod
    async def get_by_recovery_code_hash(self, code_hash: str) -> Optional[User]:
        """Get a non-deleted user holding this password recovery code hash"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass
