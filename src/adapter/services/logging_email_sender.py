import logging

from src.app.services.email_sender import IEmailSender

logger = logging.getLogger(__name__)


class LoggingEmailSender(IEmailSender):
    """
    Email sender that writes the links to the application log.

    Stands in for an SMTP or provider integration in development.
    """

    def __init__(self, frontend_url: str):
        self.frontend_url = frontend_url.rstrip("/")

    async def send_confirmation_email(self, email: str, code: str) -> None:
        link = f"{self.frontend_url}/confirm-email?code={code}"
        logger.info(f"Confirmation email to {email}: {link}")

    async def send_password_recovery_email(self, email: str, code: str) -> None:
        link = f"{self.frontend_url}/password-recovery?recoveryCode={code}"
        logger.info(f"Password recovery email to {email}: {link}")
