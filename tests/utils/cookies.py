from http.cookies import SimpleCookie
from typing import Dict, Optional

from src.depends import REFRESH_TOKEN_COOKIE


def refresh_token_from(response) -> Optional[str]:
    """Refresh token set by a response, None if absent or cleared"""
    for header in response.headers.get_list("set-cookie"):
        cookie = SimpleCookie()
        cookie.load(header)
        if REFRESH_TOKEN_COOKIE in cookie:
            return cookie[REFRESH_TOKEN_COOKIE].value or None
    return None


def refresh_cookie(refresh_token: str) -> Dict[str, str]:
    # The cookie is Secure, so the client jar never sends it over http://test
    return {"Cookie": f"{REFRESH_TOKEN_COOKIE}={refresh_token}"}


def bearer(access_token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}
