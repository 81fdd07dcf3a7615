import logging

from fastapi import APIRouter, Depends, Request, status

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.api.utils.bearer import get_xsuaa_principal
from src.app.services.bearer_verifier import XsuaaPrincipal
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.sessions import ResolveSessionUseCase, SessionContext
from src.depends import get_unit_of_work
from src.libs.result import Error

logger = logging.getLogger(__name__)

router = APIRouter(tags=["User"])

# All of these mean "not signed in" to the browser; only the logs tell them apart
UNAUTHENTICATED_CODES = ("NO_SESSION", "INVALID_SESSION", "SESSION_EXPIRED", "ORPHANED_SESSION")


@router.get("/me", status_code=status.HTTP_200_OK, response_model=SessionContext)
async def get_me(request: Request, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Load Current User & Session

    Resolves the session cookie shared by the SSO and email/password paths.

    Raises:
        - 401 Unauthorized: No, unknown, expired or orphaned session
        - 500 Internal Server Error: Session store unavailable
    """
    token = request.cookies.get(ApplicationConfig.SESSION_COOKIE_NAME)

    use_case = ResolveSessionUseCase(uow)
    result = await use_case.execute(token)

    if result.is_err():
        error = result.error
        if error.code in UNAUTHENTICATED_CODES:
            logger.info(f"Session rejected: {error.code}")
            raise ClientError(
                Error("UNAUTHENTICATED", "Not authenticated"),
                status_code=status.HTTP_401_UNAUTHORIZED,
            )
        raise ServerError(error)

    return result.value


@router.get("/me/token", status_code=status.HTTP_200_OK, response_model=XsuaaPrincipal)
async def get_token_principal(principal: XsuaaPrincipal = Depends(get_xsuaa_principal)):
    """
    Caller Behind an XSUAA Access Token

    For API clients that authenticate with `Authorization: Bearer <token>`
    instead of the session cookie.

    Raises:
        - 401 Unauthorized: No bearer token, or SSO is not bound
    """
    return principal
