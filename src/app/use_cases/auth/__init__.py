"""
Authentication Use Cases

Session lifecycle and authentication business logic.
"""

from .validate_credentials_use_case import ValidateCredentialsUseCase
from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .logout_use_case import LogoutUseCase
from .authenticate_use_case import AuthenticateUseCase
from .dtos import BearerResult, BearerStatus, TokenPair, UserContext

__all__ = [
    # Use Cases
    "ValidateCredentialsUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "AuthenticateUseCase",
    # DTOs
    "TokenPair",
    "UserContext",
    "BearerStatus",
    "BearerResult",
]
