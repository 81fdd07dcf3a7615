from datetime import UTC, datetime

from fastapi import Response

from config import ApplicationConfig


def set_session_cookie(response: Response, token: str, expires_at: datetime) -> None:
    """
    Hand the raw session token to the browser.

    The cookie name and attributes are shared with the local sign-in path.
    expires_at is naive UTC as stored in the sessions table.
    """
    response.set_cookie(
        key=ApplicationConfig.SESSION_COOKIE_NAME,
        value=token,
        expires=expires_at.replace(tzinfo=UTC),
        path="/",
        httponly=True,
        secure=ApplicationConfig.ENVIRONMENT == "production",
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=ApplicationConfig.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=ApplicationConfig.ENVIRONMENT == "production",
        samesite="lax",
    )
