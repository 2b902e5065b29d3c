"""
Session Entity

One authenticated device binding. The refresh token's jti is the session id.
"""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlalchemy import BigInteger, UniqueConstraint
from sqlmodel import Column, DateTime, Field, Index, SQLModel


class Session(SQLModel, table=True):
    """
    Session entity - one row per (user, device).

    Business Rules:
    - id is immutable and embedded as the refresh token jti
    - At most one session per device per user
    - iat/exp mirror the last issued refresh token and only move together
    - Sessions are hard-deleted on logout or termination
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    device_id: str = Field(max_length=64, nullable=False)
    device_name: str = Field(default="Unknown device", max_length=255)
    ip: str = Field(default="unknown", max_length=64)

    # Epoch seconds of the current refresh token
    iat: int = Field(sa_column=Column(BigInteger, nullable=False))
    exp: int = Field(sa_column=Column(BigInteger, nullable=False))

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(DateTime(timezone=True)),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(DateTime(timezone=True)),
    )

    __table_args__ = (
        UniqueConstraint("user_id", "device_id", name="uq_session_user_device"),
        Index("idx_session_device_id", "device_id"),
    )

    def update_dates(self, iat: int, exp: int) -> None:
        self.iat = iat
        self.exp = exp
        self.updated_at = datetime.now(UTC)
