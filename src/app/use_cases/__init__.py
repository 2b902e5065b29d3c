"""
Use Cases

Organized into domain folders:
- auth/: Login, refresh, logout, authentication
- sessions/: Device session management
- users/: User administration
"""

from .auth import (
    AuthenticateUseCase,
    LoginUseCase,
    LogoutUseCase,
    RefreshTokenUseCase,
    ValidateCredentialsUseCase,
)
from .sessions import ManageSessionsUseCase
from .users import CreateUserUseCase, DeleteUserUseCase, LoadMeUseCase

__all__ = [
    # Auth
    "AuthenticateUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "RefreshTokenUseCase",
    "ValidateCredentialsUseCase",
    # Sessions
    "ManageSessionsUseCase",
    # Users
    "CreateUserUseCase",
    "DeleteUserUseCase",
    "LoadMeUseCase",
]
