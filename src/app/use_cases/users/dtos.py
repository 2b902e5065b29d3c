"""
User Use Case DTOs
"""

from pydantic import BaseModel


class CreateUserCommand(BaseModel):
    """Validated intent to create a user account"""

    login: str
    email: str
    password: str


class UserInfo(BaseModel):
    """User information in responses"""

    id: str
    login: str
    email: str
    created_at: str


class MeResponse(BaseModel):
    """Authenticated user as seen by themselves"""

    user_id: str
    login: str
    email: str
