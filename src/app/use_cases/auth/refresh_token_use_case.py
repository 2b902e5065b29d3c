"""
Refresh Token Use Case

Rotates a session's refresh token. The token's iat must equal the stored iat,
so every rotation invalidates all refresh tokens issued before it.
"""

import logging

from config import ApplicationConfig
from src.app.services.token_service import ITokenService, InvalidTokenError
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .dtos import TokenPair
from .errors import UNAUTHORIZED, parse_uuid

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for refreshing the token pair of a session.

    Business Rules:
    - Token must verify and carry sub, jti and deviceId
    - Session (by jti) must still exist
    - Token iat must equal the session iat exactly (replay detection)
    - New pair reuses session id and device id, new iat is strictly greater
    - Stored iat/exp are swapped only if nobody rotated concurrently
    - Every failure is UNAUTHORIZED
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

    async def execute(self, refresh_token: str) -> Result[TokenPair]:
        """
        Execute refresh token use case.

        Args:
            refresh_token: Refresh token from the cookie

        Returns:
            Result with a new TokenPair, or Error(UNAUTHORIZED)
        """
        try:
            return await self._rotate(refresh_token)
        except Exception:
            logger.exception("Unexpected error during token refresh")
            return Return.err(UNAUTHORIZED)

    async def _rotate(self, refresh_token: str) -> Result[TokenPair]:
        try:
            claims = self.token_service.verify(refresh_token)
        except InvalidTokenError:
            return Return.err(UNAUTHORIZED)

        if not claims.subject or not claims.session_id or not claims.device_id:
            logger.info("Refresh rejected: incomplete token payload")
            return Return.err(UNAUTHORIZED)

        session_id = parse_uuid(claims.session_id)
        if session_id is None:
            logger.info("Refresh rejected: malformed session id")
            return Return.err(UNAUTHORIZED)

        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            if session is None:
                logger.info(f"Refresh rejected: session {session_id} not found")
                return Return.err(UNAUTHORIZED)

            if claims.issued_at != session.iat:
                logger.warning(
                    f"Refresh rejected: stale refresh token for session {session_id}"
                )
                return Return.err(UNAUTHORIZED)

            if (
                str(session.user_id) != claims.subject
                or session.device_id != claims.device_id
            ):
                logger.warning(
                    f"Refresh rejected: token does not match session {session_id}"
                )
                return Return.err(UNAUTHORIZED)

            access = self.token_service.issue(
                claims.subject, claims.device_id, self.access_token_ttl
            )
            refresh = self.token_service.issue(
                claims.subject,
                claims.device_id,
                self.refresh_token_ttl,
                include_session_id=True,
                session_id=claims.session_id,
                min_issued_at=session.iat + 1,
            )

            new_claims = refresh.claims
            if new_claims.issued_at is None or new_claims.expires_at is None:
                logger.error("Issued refresh token is missing iat/exp")
                return Return.err(UNAUTHORIZED)

            rotated = await self.uow.sessions.rotate(
                session.id, session.iat, new_claims.issued_at, new_claims.expires_at
            )
            if not rotated:
                logger.warning(
                    f"Refresh rejected: session {session_id} was rotated concurrently"
                )
                return Return.err(UNAUTHORIZED)

            await self.uow.commit()

        return Return.ok(
            TokenPair(access_token=access.token, refresh_token=refresh.token)
        )
