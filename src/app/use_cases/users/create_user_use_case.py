"""
Create User Use Case

Administrative account creation.
"""

import logging

import bcrypt

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User
from src.libs.result import Error, Result, Return
from .dtos import CreateUserCommand, UserInfo

logger = logging.getLogger(__name__)


class CreateUserUseCase:
    """
    Use case for creating a user account.

    Business Rules:
    - Login and email must both be unused (soft-deleted users included)
    - Password hashed with bcrypt cost factor 12
    - Accounts created by an administrator are email-confirmed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: CreateUserCommand) -> Result[UserInfo]:
        async with self.uow:
            for value in (command.login, command.email):
                existing = await self.uow.users.get_by_login_or_email(
                    value, include_deleted=True
                )
                if existing is not None:
                    return Return.err(
                        Error("USER_ALREADY_EXISTS", "Login or email already taken")
                    )

            password_hash = bcrypt.hashpw(
                command.password.encode("utf-8"), bcrypt.gensalt(12)
            )

            user = User(
                login=command.login,
                email=command.email,
                password_hash=password_hash.decode("utf-8"),
                is_email_confirmed=True,
            )
            user = await self.uow.users.create(user)
            await self.uow.commit()

        logger.info(f"User {user.id} created")

        return Return.ok(
            UserInfo(
                id=str(user.id),
                login=user.login,
                email=user.email,
                created_at=user.created_at.isoformat(),
            )
        )
