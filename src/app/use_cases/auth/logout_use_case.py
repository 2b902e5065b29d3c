"""
Logout Use Case

Deletes the session of the device the refresh token belongs to.
"""

import logging

from src.app.repositories.errors import StorageError
from src.app.services.token_service import ITokenService, InvalidTokenError
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .errors import UNAUTHORIZED, parse_uuid

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for single-device logout.

    Business Rules:
    - Token must verify and carry deviceId, sub and iat
    - Session is looked up by (user, device)
    - Only the live refresh token (iat equal to stored iat) may log out
    - Every failure is UNAUTHORIZED
    """

    def __init__(self, uow: UnitOfWork, token_service: ITokenService):
        self.uow = uow
        self.token_service = token_service

    async def execute(self, refresh_token: str) -> Result[None]:
        try:
            claims = self.token_service.verify(refresh_token)
        except InvalidTokenError:
            return Return.err(UNAUTHORIZED)

        if not claims.device_id or not claims.subject or claims.issued_at is None:
            logger.info("Logout rejected: incomplete token payload")
            return Return.err(UNAUTHORIZED)

        user_id = parse_uuid(claims.subject)
        if user_id is None:
            return Return.err(UNAUTHORIZED)

        try:
            async with self.uow:
                session = await self.uow.sessions.get_by_user_and_device(
                    user_id, claims.device_id
                )
                if session is None:
                    logger.info(
                        f"Logout rejected: no session for device {claims.device_id}"
                    )
                    return Return.err(UNAUTHORIZED)

                if session.iat != claims.issued_at:
                    logger.warning(
                        f"Logout rejected: stale refresh token for session {session.id}"
                    )
                    return Return.err(UNAUTHORIZED)

                await self.uow.sessions.delete_by_user_and_device(
                    user_id, claims.device_id
                )
                await self.uow.commit()
        except StorageError:
            logger.error("Logout failed on storage error")
            return Return.err(UNAUTHORIZED)

        logger.info(f"Device {claims.device_id} logged out")
        return Return.ok(None)
