from abc import ABC, abstractmethod


class IEmailSender(ABC):
    """Outgoing account emails carrying single-use codes"""

    @abstractmethod
    async def send_confirmation_email(self, email: str, code: str) -> None:
        """Send the registration confirmation code"""
        pass

    @abstractmethod
    async def send_password_recovery_email(self, email: str, code: str) -> None:
        """Send the password recovery code"""
        pass
