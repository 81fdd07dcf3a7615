import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from config import ApplicationConfig
from src.api.error import ClientError
from src.api.utils.cookies import set_session_cookie
from src.api.utils.request_meta import client_ip, user_agent
from src.app.services.credential_provider import ICredentialProvider
from src.app.services.identity_exchange import IIdentityExchangeClient
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.sso import ReconcileSsoCommand, ReconcileSsoIdentityUseCase
from src.depends import (
    get_credential_provider,
    get_identity_exchange_client,
    get_unit_of_work,
)
from src.domain.entities import SsoErrorCode
from src.libs.result import Error

logger = logging.getLogger(__name__)

router = APIRouter(tags=["SSO"])


def _login_redirect(app_url: str, error: SsoErrorCode) -> RedirectResponse:
    return RedirectResponse(
        url=f"{app_url}{ApplicationConfig.LOGIN_PATH}?error={error.value}",
        status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    )


@router.get("/auth/xsuaa")
async def xsuaa(
    request: Request,
    action: Optional[str] = Query(None, description="login or callback"),
    code: Optional[str] = Query(None, description="Authorization code (callback only)"),
    uow: UnitOfWork = Depends(get_unit_of_work),
    credential_provider: ICredentialProvider = Depends(get_credential_provider),
    exchange_client: IIdentityExchangeClient = Depends(get_identity_exchange_client),
):
    """
    XSUAA Single Sign-On

    action=login: redirects the browser to the XSUAA authorize endpoint.
    action=callback: exchanges the code, resolves the local user, sets the
    session cookie and redirects to the landing page.

    Failures redirect to the login page with ?error= set to one of
    no_code, token_exchange_failed, callback_failed, xsuaa_not_configured.

    Raises:
        - 400 Bad Request: Unknown action
    """
    app_url = credential_provider.get_app_url()
    credentials = credential_provider.get_sso_credentials()

    if credentials is None:
        return _login_redirect(app_url, SsoErrorCode.xsuaa_not_configured)

    redirect_uri = f"{app_url}{ApplicationConfig.API_PREFIX}/auth/xsuaa?action=callback"

    if action == "login":
        authorize_url = httpx.URL(
            f"{credentials.url.rstrip('/')}/oauth/authorize",
            params={
                "client_id": credentials.clientid,
                "redirect_uri": redirect_uri,
                "response_type": "code",
                "scope": "openid",
            },
        )
        return RedirectResponse(
            url=str(authorize_url), status_code=status.HTTP_307_TEMPORARY_REDIRECT
        )

    if action == "callback":
        if not code:
            return _login_redirect(app_url, SsoErrorCode.no_code)

        try:
            exchange = await exchange_client.exchange_code(code, redirect_uri, credentials)
            if exchange.is_err():
                logger.error(f"XSUAA code exchange failed: {exchange.error.code}")
                if exchange.error.code == "TOKEN_EXCHANGE_FAILED":
                    return _login_redirect(app_url, SsoErrorCode.token_exchange_failed)
                return _login_redirect(app_url, SsoErrorCode.callback_failed)

            command = ReconcileSsoCommand.from_exchange(
                exchange.value,
                ip_address=client_ip(request),
                user_agent=user_agent(request),
            )
            result = await ReconcileSsoIdentityUseCase(uow).execute(command)
            if result.is_err():
                logger.error(f"XSUAA callback failed: {result.error.code}")
                return _login_redirect(app_url, SsoErrorCode.callback_failed)
        except Exception:
            logger.exception("XSUAA callback error")
            return _login_redirect(app_url, SsoErrorCode.callback_failed)

        login = result.value
        response = RedirectResponse(
            url=f"{app_url}{ApplicationConfig.LANDING_PATH}",
            status_code=status.HTTP_307_TEMPORARY_REDIRECT,
        )
        set_session_cookie(response, login.session_token, login.expires_at)
        return response

    raise ClientError(Error("INVALID_ACTION", "Invalid action"), status_code=status.HTTP_400_BAD_REQUEST)


class SsoErrorResponse(BaseModel):
    code: str
    message: str


@router.get("/auth/error", response_model=SsoErrorResponse)
async def sso_error_message(code: str = Query(..., description="Value of ?error= on the login page")):
    """
    Human-readable message for a login-page error code

    Raises:
        - 404 Not Found: Unknown code
    """
    try:
        error = SsoErrorCode(code)
    except ValueError:
        raise ClientError(
            Error("UNKNOWN_ERROR_CODE", f"Unknown error code: {code}"),
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return SsoErrorResponse(code=error.value, message=error.message)
