"""
Registration Use Case DTOs
"""

from pydantic import BaseModel


class RegistrationCommand(BaseModel):
    """Validated self-service sign-up"""

    login: str
    email: str
    password: str


class NewPasswordCommand(BaseModel):
    """Password change authorised by a recovery code"""

    recovery_code: str
    new_password: str
