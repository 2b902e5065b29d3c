"""
Delete User Use Case

Soft-deletes a user. Their tokens stop authenticating on the next check.
"""

import logging
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class DeleteUserUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[None]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None or user.is_deleted:
                return Return.err(Error("NOT_FOUND", "User not found"))

            user.make_deleted()
            await self.uow.users.update(user)
            await self.uow.commit()

        logger.info(f"User {user_id} deleted")
        return Return.ok(None)
