"""
Manage Sessions Use Case

Listing and termination of a user's device sessions.
"""

import logging
from datetime import UTC, datetime
from typing import List
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import SessionView

logger = logging.getLogger(__name__)


class ManageSessionsUseCase:
    """
    Use case for managing the sessions of an authenticated user.

    Business Rules:
    - Users can only terminate their own sessions
    - Terminating by device id distinguishes NOT_FOUND from FORBIDDEN
    - Terminating all other sessions always keeps the current device
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def list_sessions(self, user_id: UUID) -> Result[List[SessionView]]:
        """
        List active sessions of a user.

        Args:
            user_id: Owner of the sessions

        Returns:
            Result with SessionView list (last_active_date taken from iat, never in the future)
        """
        async with self.uow:
            sessions = await self.uow.sessions.get_by_user_id(user_id)
            # Rapid refreshes push iat ahead of the wall clock by up to a few seconds
            now = int(datetime.now(UTC).timestamp())
            views = [
                SessionView(
                    ip=session.ip,
                    title=session.device_name,
                    last_active_date=datetime.fromtimestamp(min(session.iat, now), UTC)
                    .isoformat()
                    .replace("+00:00", "Z"),
                    device_id=session.device_id,
                )
                for session in sessions
            ]

        return Return.ok(views)

    async def delete_session(
        self, requesting_user_id: UUID, device_id: str
    ) -> Result[None]:
        """
        Terminate the session of one device.

        Args:
            requesting_user_id: Authenticated user asking for the termination
            device_id: Device whose session is terminated

        Returns:
            Result with None, or Error(NOT_FOUND / FORBIDDEN)
        """
        async with self.uow:
            session = await self.uow.sessions.get_by_device_id(device_id)
            if session is None:
                return Return.err(Error("NOT_FOUND", "Session not found"))

            if session.user_id != requesting_user_id:
                logger.warning(
                    f"User {requesting_user_id} tried to terminate device {device_id} of another user"
                )
                return Return.err(
                    Error(
                        "FORBIDDEN",
                        "Cannot delete session that belongs to another user",
                    )
                )

            deleted = await self.uow.sessions.delete_by_device_id(device_id)
            if not deleted:
                return Return.err(
                    Error("NOT_FOUND", "Session not found after attempting to delete")
                )

            await self.uow.commit()

        logger.info(f"Session on device {device_id} terminated by user {requesting_user_id}")
        return Return.ok(None)

    async def delete_all_except_current(
        self, user_id: UUID, current_device_id: str
    ) -> Result[int]:
        """
        Terminate every session of the user except the current device.

        Returns:
            Result with the number of terminated sessions, or Error(VALIDATION_ERROR)
        """
        if not user_id or not current_device_id:
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    "User ID and current device ID must be provided",
                )
            )

        async with self.uow:
            count = await self.uow.sessions.delete_all_except_device(
                user_id, current_device_id
            )
            await self.uow.commit()

        logger.info(f"Terminated {count} other session(s) of user {user_id}")
        return Return.ok(count)
