"""
Login Use Case

Registers a new device session and issues its token pair.
"""

import logging
from uuid import UUID, uuid4

from config import ApplicationConfig
from src.app.services.token_service import ITokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import generate_uuid
from src.domain.entities import Session
from src.libs.result import Error, Result, Return
from .dtos import TokenPair

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for session creation after credentials were validated.

    Business Rules:
    - Every login registers a new device (fresh device_id and session_id)
    - Access token carries no session id
    - Refresh token carries jti = session id
    - Session stores exactly the iat/exp embedded in the refresh token
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_service: ITokenService,
        access_token_ttl: int = ApplicationConfig.ACCESS_TOKEN_EXPIRES_IN,
        refresh_token_ttl: int = ApplicationConfig.REFRESH_TOKEN_EXPIRES_IN,
    ):
        self.uow = uow
        self.token_service = token_service
        self.access_token_ttl = access_token_ttl
        self.refresh_token_ttl = refresh_token_ttl

    async def execute(self, user_id: UUID, device_name: str, ip: str) -> Result[TokenPair]:
        """
        Execute login use case.

        Args:
            user_id: Id of a user whose credentials were already checked
            device_name: Human readable device label (usually the User-Agent)
            ip: Client address

        Returns:
            Result with TokenPair, or Error(INTERNAL_ERROR)
        """
        device_id = generate_uuid()
        session_id = uuid4()

        access = self.token_service.issue(
            str(user_id), device_id, self.access_token_ttl
        )
        refresh = self.token_service.issue(
            str(user_id),
            device_id,
            self.refresh_token_ttl,
            include_session_id=True,
            session_id=str(session_id),
        )

        claims = refresh.claims
        if claims.issued_at is None or claims.expires_at is None:
            logger.error("Issued refresh token is missing iat/exp")
            return Return.err(
                Error("INTERNAL_ERROR", "Failed to issue refresh token")
            )

        async with self.uow:
            session = Session(
                id=session_id,
                user_id=user_id,
                device_id=device_id,
                device_name=device_name,
                ip=ip,
                iat=claims.issued_at,
                exp=claims.expires_at,
            )
            await self.uow.sessions.save(session)
            await self.uow.commit()

        logger.info(f"Session {session_id} created for user {user_id} on device {device_id}")

        return Return.ok(
            TokenPair(access_token=access.token, refresh_token=refresh.token)
        )
