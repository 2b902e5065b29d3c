"""
Confirm Registration Use Case
"""

import logging
import time
from typing import Callable

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .codes import is_expired

logger = logging.getLogger(__name__)

INVALID_CONFIRMATION_CODE = Error(
    "INVALID_CONFIRMATION_CODE",
    "The confirmation code is incorrect, expired or already applied",
)


class ConfirmRegistrationUseCase:
    """
    Use case for email confirmation.

    Business Rules:
    - Code must belong to a non-deleted, unconfirmed user and be unexpired
    - Confirmation clears the code (single-use)
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], float] = time.time):
        self.uow = uow
        self.clock = clock

    async def execute(self, code: str) -> Result[None]:
        async with self.uow:
            user = await self.uow.users.get_by_confirmation_code(code)
            if (
                user is None
                or user.is_email_confirmed
                or is_expired(user.confirmation_code_exp, self.clock())
            ):
                return Return.err(INVALID_CONFIRMATION_CODE)

            user.confirm_email()
            await self.uow.users.update(user)
            await self.uow.commit()
            user_id = user.id

        logger.info(f"Email confirmed for user {user_id}")
        return Return.ok(None)
