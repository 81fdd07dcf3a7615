"""Cookie-presence gate in front of protected pages."""

import logging
from typing import Iterable, Optional
from urllib.parse import urlencode

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from src.app.services.bearer_verifier import IBearerTokenVerifier
from src.app.services.credential_provider import ICredentialProvider

logger = logging.getLogger(__name__)

PUBLIC_ROUTES = ("/", "/login", "/signup", "/api/auth", "/api/health", "/api/me")

# Framework and documentation paths that never need a session
SKIP_PREFIXES = ("/_next", "/static", "/docs", "/redoc", "/openapi.json")


def is_public_path(path: str, public_routes: Iterable[str] = PUBLIC_ROUTES) -> bool:
    for route in public_routes:
        if path == route:
            return True
        if route != "/" and path.startswith(f"{route}/"):
            return True
    return False


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"error": {"code": code, "message": message}}
    )


class SessionGateMiddleware(BaseHTTPMiddleware):
    """
    Redirects requests without a session cookie to the login page.

    Only checks that the cookie is present; /api/me does the real validation.
    Never talks to the store.

    With SSO bound, /api/ requests carrying an Authorization header are
    authenticated by their XSUAA access token instead: a valid token puts the
    caller on request.state.xsuaa_user, anything else is answered with 401.
    """

    def __init__(
        self,
        app,
        credential_provider: ICredentialProvider,
        cookie_name: str,
        login_path: str = "/login",
        bearer_verifier: Optional[IBearerTokenVerifier] = None,
    ):
        super().__init__(app)
        self.credential_provider = credential_provider
        self.cookie_name = cookie_name
        self.login_path = login_path
        self.bearer_verifier = bearer_verifier

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path

        if path.startswith(SKIP_PREFIXES) or "." in path:
            return await call_next(request)

        auth_header = request.headers.get("authorization")
        if auth_header and path.startswith("/api/") and self.credential_provider.is_sso_enabled():
            return await self._dispatch_bearer(request, call_next, auth_header)

        if is_public_path(path):
            return await call_next(request)

        if not request.cookies.get(self.cookie_name):
            query = urlencode({"callbackUrl": path})
            logger.debug(f"No session cookie for {path}, redirecting to login")
            return RedirectResponse(url=f"{self.login_path}?{query}", status_code=307)

        return await call_next(request)

    async def _dispatch_bearer(self, request: Request, call_next, auth_header: str) -> Response:
        credentials = self.credential_provider.get_sso_credentials()
        if self.bearer_verifier is None or credentials is None:
            logger.error("Bearer token presented but no verifier is configured")
            return _error_response(
                status.HTTP_503_SERVICE_UNAVAILABLE,
                "BEARER_VERIFICATION_UNAVAILABLE",
                "Token verification is not configured",
            )

        result = self.bearer_verifier.verify(auth_header, credentials)
        if result.is_err():
            if result.error.code == "INVALID_BEARER_TOKEN":
                return _error_response(
                    status.HTTP_401_UNAUTHORIZED, result.error.code, "Unauthorized - Invalid token"
                )
            return _error_response(
                status.HTTP_503_SERVICE_UNAVAILABLE, result.error.code, result.error.message
            )

        principal = result.value
        request.state.xsuaa_user = principal
        request.state.xsuaa_scopes = principal.scopes
        logger.debug(f"Bearer token accepted for {principal.id} on {request.url.path}")
        return await call_next(request)
