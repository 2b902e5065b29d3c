import hashlib
import secrets
from typing import Optional


def generate_code() -> str:
    return secrets.token_urlsafe(32)


def hash_code(code: str) -> str:
    return hashlib.sha256(code.encode()).hexdigest()


def is_expired(expires_at: Optional[int], now: float) -> bool:
    return expires_at is None or expires_at < now
