"""
New Password Use Case

Sets a new password using an emailed recovery code.
"""

import logging
import time
from typing import Callable

import bcrypt

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .codes import hash_code, is_expired
from .dtos import NewPasswordCommand

logger = logging.getLogger(__name__)


class NewPasswordUseCase:
    """
    Use case for completing password recovery.

    Business Rules:
    - Recovery code must match a stored hash and be unexpired
    - Password hashed with bcrypt cost factor 12
    - The code is burned and every session of the user is terminated
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], float] = time.time):
        self.uow = uow
        self.clock = clock

    async def execute(self, command: NewPasswordCommand) -> Result[None]:
        """
        Returns:
            Result with None, or Error(INVALID_RECOVERY_CODE)
        """
        async with self.uow:
            user = await self.uow.users.get_by_recovery_code_hash(
                hash_code(command.recovery_code)
            )
            if user is None or is_expired(user.recovery_code_exp, self.clock()):
                return Return.err(
                    Error("INVALID_RECOVERY_CODE", "Recovery code is incorrect or expired")
                )

            password_hash = bcrypt.hashpw(
                command.new_password.encode("utf-8"), bcrypt.gensalt(12)
            )
            user.change_password(password_hash.decode("utf-8"))
            await self.uow.users.update(user)
            revoked = await self.uow.sessions.delete_by_user_id(user.id)
            await self.uow.commit()
            user_id = user.id

        logger.info(f"Password changed for user {user_id}, {revoked} session(s) terminated")
        return Return.ok(None)
