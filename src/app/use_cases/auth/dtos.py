"""
Authentication Use Case DTOs (Data Transfer Objects)

Response and context classes for the auth domain.
"""

from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class TokenPair(BaseModel):
    """Access token for the Authorization header, refresh token for the cookie"""

    access_token: str
    refresh_token: str


class UserContext(BaseModel):
    """Authenticated caller: user and the device the credential is bound to"""

    user_id: UUID
    device_id: str


class BearerStatus(str, Enum):
    """Outcome of the bearer step of hybrid authentication"""

    ok = "ok"
    absent = "absent"
    invalid = "invalid"


class BearerResult(BaseModel):
    status: BearerStatus
    context: Optional[UserContext] = None

    @classmethod
    def ok(cls, context: UserContext) -> "BearerResult":
        return cls(status=BearerStatus.ok, context=context)

    @classmethod
    def absent(cls) -> "BearerResult":
        return cls(status=BearerStatus.absent)

    @classmethod
    def invalid(cls) -> "BearerResult":
        return cls(status=BearerStatus.invalid)
