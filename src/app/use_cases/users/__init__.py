"""
User Management Use Cases
"""

from .create_user_use_case import CreateUserUseCase
from .delete_user_use_case import DeleteUserUseCase
from .load_me_use_case import LoadMeUseCase
from .dtos import CreateUserCommand, MeResponse, UserInfo

__all__ = [
    "CreateUserUseCase",
    "DeleteUserUseCase",
    "LoadMeUseCase",
    "CreateUserCommand",
    "MeResponse",
    "UserInfo",
]
