"""
JWT Token Service

HS256 tokens signed with python-jose. Claim names on the wire:
sub (user id), deviceId, jti (session id, refresh tokens only), iat, exp.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional
from uuid import uuid4

from jose import JWTError, jwt

from src.app.services.token_service import (
    ITokenService,
    InvalidTokenError,
    IssuedToken,
    TokenClaims,
)

logger = logging.getLogger(__name__)


def _int_claim(payload: Dict[str, Any], name: str) -> Optional[int]:
    value = payload.get(name)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _str_claim(payload: Dict[str, Any], name: str) -> Optional[str]:
    value = payload.get(name)
    return value if isinstance(value, str) and value else None


def _to_claims(payload: Dict[str, Any]) -> TokenClaims:
    return TokenClaims(
        subject=_str_claim(payload, "sub"),
        device_id=_str_claim(payload, "deviceId"),
        session_id=_str_claim(payload, "jti"),
        issued_at=_int_claim(payload, "iat"),
        expires_at=_int_claim(payload, "exp"),
    )


class JwtTokenService(ITokenService):
    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        clock: Callable[[], float] = time.time,
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._clock = clock

    def issue(
        self,
        user_id: str,
        device_id: str,
        ttl_seconds: int,
        include_session_id: bool = False,
        session_id: Optional[str] = None,
        min_issued_at: Optional[int] = None,
    ) -> IssuedToken:
        """
        Sign a token.

        Args:
            user_id: Token subject
            device_id: Device the token is bound to
            ttl_seconds: Lifetime from iat
            include_session_id: Embed jti (refresh tokens)
            session_id: jti value; a fresh uuid when omitted
            min_issued_at: Lower bound for iat, used to keep rotated iat strictly increasing

        Returns:
            IssuedToken with the token and the claims read back from it
        """
        issued_at = int(self._clock())
        if min_issued_at is not None and issued_at < min_issued_at:
            issued_at = min_issued_at

        payload: Dict[str, Any] = {
            "sub": user_id,
            "deviceId": device_id,
            "iat": issued_at,
            "exp": issued_at + ttl_seconds,
        }
        if include_session_id:
            payload["jti"] = session_id or str(uuid4())

        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        return IssuedToken(token=token, claims=self.decode(token))

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError as exc:
            logger.info(f"Token verification failed: {exc}")
            raise InvalidTokenError(str(exc)) from exc
        return _to_claims(payload)

    def decode(self, token: str) -> Optional[TokenClaims]:
        try:
            payload = jwt.get_unverified_claims(token)
        except JWTError:
            return None
        return _to_claims(payload)
