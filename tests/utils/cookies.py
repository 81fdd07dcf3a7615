from http.cookies import SimpleCookie
from typing import Dict, Optional

from httpx import Response

from config import ApplicationConfig


def session_cookie(response: Response) -> Optional[SimpleCookie]:
    """Parsed session Set-Cookie header of a response, if it sets one"""
    for header in response.headers.get_list("set-cookie"):
        cookie = SimpleCookie()
        cookie.load(header)
        if ApplicationConfig.SESSION_COOKIE_NAME in cookie:
            return cookie
    return None


def session_token(response: Response) -> Optional[str]:
    cookie = session_cookie(response)
    if cookie is None:
        return None
    return cookie[ApplicationConfig.SESSION_COOKIE_NAME].value


def session_headers(token: str) -> Dict[str, str]:
    return {"Cookie": f"{ApplicationConfig.SESSION_COOKIE_NAME}={token}"}
