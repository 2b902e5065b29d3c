from typing import Optional
from uuid import UUID

from src.libs.result import Error

# Every authentication failure looks the same to the caller
UNAUTHORIZED = Error("UNAUTHORIZED", "Unauthorized")


def parse_uuid(value: Optional[str]) -> Optional[UUID]:
    if not value:
        return None
    try:
        return UUID(value)
    except ValueError:
        return None
