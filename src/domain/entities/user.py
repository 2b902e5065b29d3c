"""
User Entity

Account owner referenced by sessions. Deleted users are kept with deleted_at set.
"""

from datetime import UTC, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import BigInteger
from sqlmodel import Column, DateTime, Field, SQLModel


class User(SQLModel, table=True):
    """
    User entity - a person who can hold sessions on many devices.

    Business Rules:
    - Login and email are unique across all users
    - Password stored as bcrypt hash (cost factor 12)
    - Soft delete only: deleted users can no longer authenticate
    - Confirmation and recovery codes are single-use and expire (epoch seconds)
    - Only the SHA-256 hash of a recovery code is stored
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    login: str = Field(unique=True, index=True, max_length=64)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    is_email_confirmed: bool = Field(default=False)
    confirmation_code: Optional[str] = Field(default=None, index=True, max_length=64)
    confirmation_code_exp: Optional[int] = Field(
        default=None, sa_column=Column(BigInteger, nullable=True)
    )

    recovery_code_hash: Optional[str] = Field(default=None, index=True, max_length=64)
    recovery_code_exp: Optional[int] = Field(
        default=None, sa_column=Column(BigInteger, nullable=True)
    )

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(DateTime(timezone=True)),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(DateTime(timezone=True)),
    )
    deleted_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime(timezone=True))
    )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def make_deleted(self) -> None:
        if self.deleted_at is not None:
            raise ValueError("User already deleted")
        self.deleted_at = datetime.now(UTC)
        self.updated_at = self.deleted_at

    def issue_confirmation_code(self, code: str, expires_at: int) -> None:
        self.confirmation_code = code
        self.confirmation_code_exp = expires_at
        self.updated_at = datetime.now(UTC)

    def confirm_email(self) -> None:
        self.is_email_confirmed = True
        self.confirmation_code = None
        self.confirmation_code_exp = None
        self.updated_at = datetime.now(UTC)

    def issue_recovery_code(self, code_hash: str, expires_at: int) -> None:
        self.recovery_code_hash = code_hash
        self.recovery_code_exp = expires_at
        self.updated_at = datetime.now(UTC)

    def change_password(self, password_hash: str) -> None:
        """Set a new bcrypt hash and burn the recovery code"""
        self.password_hash = password_hash
        self.recovery_code_hash = None
        self.recovery_code_exp = None
        self.updated_at = datetime.now(UTC)
