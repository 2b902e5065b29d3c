"""
Authenticate Use Case

Hybrid authentication: bearer access token first, refresh-token cookie second.

Access tokens are not checked against sessions, so a terminated session keeps
its unexpired access tokens working until they expire.
"""

import logging
from typing import Optional

from src.app.repositories.errors import StorageError
from src.app.services.token_service import ITokenService, InvalidTokenError
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import BearerResult, BearerStatus, UserContext
from .errors import UNAUTHORIZED, parse_uuid

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class AuthenticateUseCase:
    """
    Use case resolving the caller of a request.

    Business Rules:
    - A verifiable access token of an existing, non-deleted user wins outright
    - Refresh tokens (carrying a session id) are never accepted as bearer
    - Otherwise the refresh cookie is checked against its session
      (iat equality, device match, user not deleted)
    - A failure on the cookie path is final
    """

    def __init__(self, uow: UnitOfWork, token_service: ITokenService):
        self.uow = uow
        self.token_service = token_service

    async def execute(
        self, authorization: Optional[str], refresh_token: Optional[str]
    ) -> Result[UserContext]:
        """
        Execute hybrid authentication.

        Args:
            authorization: Raw Authorization header, if any
            refresh_token: refreshToken cookie value, if any

        Returns:
            Result with UserContext, or Error(UNAUTHORIZED)
        """
        bearer = await self.authenticate_bearer(authorization)
        if bearer.status is BearerStatus.ok:
            return Return.ok(bearer.context)

        if not refresh_token:
            return Return.err(Error("UNAUTHORIZED", "Authentication required"))

        return await self.authenticate_refresh_token(refresh_token)

    async def authenticate_bearer(self, authorization: Optional[str]) -> BearerResult:
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            return BearerResult.absent()

        access_token = authorization[len(BEARER_PREFIX):].strip()
        if not access_token:
            return BearerResult.absent()

        try:
            claims = self.token_service.verify(access_token)
        except InvalidTokenError:
            return BearerResult.invalid()

        if claims.session_id:
            logger.info("Bearer rejected: refresh token presented as access token")
            return BearerResult.invalid()

        user_id = parse_uuid(claims.subject)
        if user_id is None or not claims.device_id:
            return BearerResult.invalid()

        try:
            async with self.uow:
                user = await self.uow.users.get_by_id(user_id)
                active = user is not None and not user.is_deleted
        except StorageError:
            logger.warning("Bearer authentication skipped on storage error")
            return BearerResult.invalid()

        if not active:
            return BearerResult.invalid()

        return BearerResult.ok(UserContext(user_id=user_id, device_id=claims.device_id))

    async def authenticate_refresh_token(self, refresh_token: str) -> Result[UserContext]:
        try:
            return await self._check_refresh_token(refresh_token)
        except Exception:
            logger.exception("Unexpected error during refresh token authentication")
            return Return.err(UNAUTHORIZED)

    async def _check_refresh_token(self, refresh_token: str) -> Result[UserContext]:
        try:
            claims = self.token_service.verify(refresh_token)
        except InvalidTokenError:
            return Return.err(UNAUTHORIZED)

        if (
            not claims.subject
            or not claims.session_id
            or not claims.device_id
            or claims.issued_at is None
        ):
            logger.info("Refresh token rejected: incomplete token payload")
            return Return.err(UNAUTHORIZED)

        user_id = parse_uuid(claims.subject)
        session_id = parse_uuid(claims.session_id)
        if user_id is None or session_id is None:
            return Return.err(UNAUTHORIZED)

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None or user.is_deleted:
                logger.info(f"Refresh token rejected: user {user_id} not found or deleted")
                return Return.err(UNAUTHORIZED)

            session = await self.uow.sessions.get_by_id(session_id)
            if session is None:
                logger.info(f"Refresh token rejected: session {session_id} not found")
                return Return.err(UNAUTHORIZED)

            if session.iat != claims.issued_at:
                logger.warning(f"Refresh token rejected: stale token for session {session_id}")
                return Return.err(UNAUTHORIZED)

            if session.device_id != claims.device_id:
                logger.warning(
                    f"Refresh token rejected: device mismatch for session {session_id}"
                )
                return Return.err(UNAUTHORIZED)

        return Return.ok(UserContext(user_id=user_id, device_id=claims.device_id))
