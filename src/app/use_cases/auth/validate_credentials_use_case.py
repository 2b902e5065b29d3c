"""
Validate Credentials Use Case

Checks login/email and password; failed attempts feed the rate limiter.
"""

import logging
from typing import Optional
from uuid import UUID

import bcrypt

from config import ApplicationConfig
from src.app.services.rate_limiter import IRateLimiter
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class ValidateCredentialsUseCase:
    """
    Use case for credential verification.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - Deleted users are treated as unknown
    - Email must be confirmed unless users are confirmed automatically
    - Each failed attempt counts against login:<ip> in the rate limiter
    """

    def __init__(
        self,
        uow: UnitOfWork,
        rate_limiter: IRateLimiter,
        max_attempts: int = ApplicationConfig.RATE_LIMIT_MAX,
        window_ms: int = ApplicationConfig.RATE_LIMIT_WINDOW_MS,
        auto_confirm: bool = ApplicationConfig.IS_USER_AUTOMATICALLY_CONFIRMED,
    ):
        self.uow = uow
        self.rate_limiter = rate_limiter
        self.max_attempts = max_attempts
        self.window_ms = window_ms
        self.auto_confirm = auto_confirm

    async def execute(
        self, login_or_email: str, password: str, ip: Optional[str]
    ) -> Result[UUID]:
        """
        Execute credential validation.

        Args:
            login_or_email: Login or email address
            password: Plain text password
            ip: Client address, used as the rate limiter key

        Returns:
            Result with the user id, or Error(INVALID_CREDENTIALS / TOO_MANY_REQUESTS)
        """
        async with self.uow:
            user = await self.uow.users.get_by_login_or_email(login_or_email)

            if user is None:
                # Hash dummy password to maintain constant time
                bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(12))
                logger.info("Login failed: unknown login or email")
                return self._failed_attempt(ip)

            if not self.auto_confirm and not user.is_email_confirmed:
                logger.info(f"Login failed: email not confirmed for user {user.id}")
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid login or password")
                )

            password_valid = bcrypt.checkpw(
                password.encode(), user.password_hash.encode()
            )
            if not password_valid:
                logger.info(f"Login failed: wrong password for user {user.id}")
                return self._failed_attempt(ip)

            return Return.ok(user.id)

    def _failed_attempt(self, ip: Optional[str]) -> Result[UUID]:
        key = f"login:{ip or 'unknown'}"
        if self.rate_limiter.is_limited(key, self.max_attempts, self.window_ms):
            return Return.err(
                Error("TOO_MANY_REQUESTS", "Too many login attempts, try again later")
            )
        return Return.err(Error("INVALID_CREDENTIALS", "Invalid login or password"))
