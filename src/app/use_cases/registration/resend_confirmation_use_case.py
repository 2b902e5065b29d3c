"""
Resend Confirmation Use Case

Issues a fresh confirmation code and emails it again.
"""

import logging
import time
from typing import Callable

from config import ApplicationConfig
from src.app.services.email_sender import IEmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .codes import generate_code

logger = logging.getLogger(__name__)


class ResendConfirmationUseCase:
    """
    Use case for resending the registration confirmation email.

    Business Rules:
    - Email must belong to a non-deleted user
    - Already confirmed users are rejected, unless users are confirmed
      automatically (then nothing is sent)
    - Each resend replaces the previous code
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        auto_confirm: bool = ApplicationConfig.IS_USER_AUTOMATICALLY_CONFIRMED,
        code_ttl: int = ApplicationConfig.CONFIRMATION_CODE_EXPIRES_IN,
        clock: Callable[[], float] = time.time,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.auto_confirm = auto_confirm
        self.code_ttl = code_ttl
        self.clock = clock

    async def execute(self, email: str) -> Result[None]:
        """
        Returns:
            Result with None, or Error(INVALID_EMAIL)
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                return Return.err(
                    Error("INVALID_EMAIL", "No registered user with this email")
                )

            if self.auto_confirm:
                return Return.ok(None)

            if user.is_email_confirmed:
                return Return.err(Error("INVALID_EMAIL", "Email is already confirmed"))

            code = generate_code()
            user.issue_confirmation_code(code, int(self.clock()) + self.code_ttl)
            await self.uow.users.update(user)
            await self.uow.commit()
            user_id = user.id

        try:
            await self.email_sender.send_confirmation_email(email, code)
        except Exception:
            logger.exception(f"Confirmation email to user {user_id} failed")

        logger.info(f"Confirmation code reissued for user {user_id}")
        return Return.ok(None)
