"""
Load Me Use Case

Loads the authenticated user's own profile.
"""

from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import MeResponse


class LoadMeUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[MeResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None or user.is_deleted:
                return Return.err(Error("UNAUTHORIZED", "Unauthorized"))

            return Return.ok(
                MeResponse(user_id=str(user.id), login=user.login, email=user.email)
            )
