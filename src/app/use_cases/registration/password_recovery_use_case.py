"""
Password Recovery Use Case

Emails a single-use recovery code.
"""

import logging
import time
from typing import Callable

from config import ApplicationConfig
from src.app.services.email_sender import IEmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .codes import generate_code, hash_code

logger = logging.getLogger(__name__)


class PasswordRecoveryUseCase:
    """
    Use case for requesting a password recovery code.

    Business Rules:
    - No email enumeration: unknown emails succeed without sending anything
    - Only the SHA-256 hash of the code is stored
    - A new request replaces any earlier code
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        code_ttl: int = ApplicationConfig.RECOVERY_CODE_EXPIRES_IN,
        clock: Callable[[], float] = time.time,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.code_ttl = code_ttl
        self.clock = clock

    async def execute(self, email: str) -> Result[None]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                logger.info("Password recovery requested for unknown email")
                return Return.ok(None)

            code = generate_code()
            user.issue_recovery_code(hash_code(code), int(self.clock()) + self.code_ttl)
            await self.uow.users.update(user)
            await self.uow.commit()
            user_id = user.id

        try:
            await self.email_sender.send_password_recovery_email(email, code)
        except Exception:
            logger.exception(f"Password recovery email to user {user_id} failed")

        logger.info(f"Password recovery code issued for user {user_id}")
        return Return.ok(None)
