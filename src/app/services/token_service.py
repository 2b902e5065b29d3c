"""
Token Service Contract

Signed tokens carry {sub, deviceId, iat, exp} and, for refresh tokens, jti.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class InvalidTokenError(Exception):
    """Token signature is invalid, the token is malformed, or it has expired"""


class TokenClaims(BaseModel):
    """Decoded token claims"""

    subject: Optional[str] = None
    device_id: Optional[str] = None
    session_id: Optional[str] = None
    issued_at: Optional[int] = None
    expires_at: Optional[int] = None


class IssuedToken(BaseModel):
    """Signed token plus exactly the claims embedded in it"""

    token: str
    claims: TokenClaims


class ITokenService(ABC):
    @abstractmethod
    def issue(
        self,
        user_id: str,
        device_id: str,
        ttl_seconds: int,
        include_session_id: bool = False,
        session_id: Optional[str] = None,
        min_issued_at: Optional[int] = None,
    ) -> IssuedToken:
        """Sign a token. jti is embedded only when include_session_id is set."""
        pass

    @abstractmethod
    def verify(self, token: str) -> TokenClaims:
        """Verify signature and expiry. Raises InvalidTokenError."""
        pass

    @abstractmethod
    def decode(self, token: str) -> Optional[TokenClaims]:
        """Read claims without verifying. Not for trust decisions."""
        pass
