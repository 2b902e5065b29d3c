"""
Registration Use Case

Self-service sign-up with email confirmation.
"""

import logging
import time
from typing import Callable

import bcrypt

from config import ApplicationConfig
from src.app.services.email_sender import IEmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User
from src.libs.result import Error, Result, Return
from .codes import generate_code
from .dtos import RegistrationCommand

logger = logging.getLogger(__name__)


class RegistrationUseCase:
    """
    Use case for user registration.

    Business Rules:
    - Login and email are checked separately, soft-deleted users included
    - Password hashed with bcrypt cost factor 12
    - New users are unconfirmed and get a confirmation code, unless users
      are confirmed automatically
    - A failed confirmation email does not undo the registration
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

    async def execute(self, command: RegistrationCommand) -> Result[None]:
        """
        Execute registration.

        Args:
            command: Login, email and plain text password

        Returns:
            Result with None, or Error(LOGIN_ALREADY_EXISTS / EMAIL_ALREADY_EXISTS)
        """
        async with self.uow:
            if await self.uow.users.get_by_login_or_email(
                command.login, include_deleted=True
            ):
                return Return.err(Error("LOGIN_ALREADY_EXISTS", "Login already exists"))

            if await self.uow.users.get_by_login_or_email(
                command.email, include_deleted=True
            ):
                return Return.err(Error("EMAIL_ALREADY_EXISTS", "Email already exists"))

            password_hash = bcrypt.hashpw(
                command.password.encode("utf-8"), bcrypt.gensalt(12)
            )
            user = User(
                login=command.login,
                email=command.email,
                password_hash=password_hash.decode("utf-8"),
                is_email_confirmed=self.auto_confirm,
            )

            code = None
            if not self.auto_confirm:
                code = generate_code()
                user.issue_confirmation_code(code, int(self.clock()) + self.code_ttl)

            user = await self.uow.users.create(user)
            await self.uow.commit()
            user_id = user.id

        logger.info(f"User {user_id} registered")

        if code is not None:
            try:
                await self.email_sender.send_confirmation_email(command.email, code)
            except Exception:
                logger.exception(f"Confirmation email to user {user_id} failed")

        return Return.ok(None)
