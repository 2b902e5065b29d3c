"""
Registration and Password Recovery Use Cases

Self-service account creation with email confirmation, and password reset by
emailed recovery code.
"""

from .registration_use_case import RegistrationUseCase
from .confirm_registration_use_case import ConfirmRegistrationUseCase
from .resend_confirmation_use_case import ResendConfirmationUseCase
from .password_recovery_use_case import PasswordRecoveryUseCase
from .new_password_use_case import NewPasswordUseCase
from .dtos import NewPasswordCommand, RegistrationCommand

__all__ = [
    # Use Cases
    "RegistrationUseCase",
    "ConfirmRegistrationUseCase",
    "ResendConfirmationUseCase",
    "PasswordRecoveryUseCase",
    "NewPasswordUseCase",
    # DTOs
    "RegistrationCommand",
    "NewPasswordCommand",
]
