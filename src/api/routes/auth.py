import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.api.utils.cookies import clear_session_cookie, set_session_cookie
from src.api.utils.request_meta import client_ip, user_agent
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    LoginCommand,
    LoginUseCase,
    SignupCommand,
    SignupUseCase,
    UserInfo,
    VerifyEmailResponse,
    VerifyEmailUseCase,
)
from src.app.use_cases.sessions import SignOutResponse, SignOutUseCase
from src.depends import get_unit_of_work

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class AuthSessionResponse(BaseModel):
    """Body returned next to the session cookie"""

    user: UserInfo
    session_id: str
    expires_at: datetime


class SignupRequest(BaseModel):
    """
    Signup HTTP request payload

    Validates incoming HTTP request before converting to SignupCommand.
    """

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="User password (min 8 chars)")


@router.post(
    "/sign-up/email",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthSessionResponse,
)
async def sign_up(
    body: SignupRequest,
    request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Email/Password Signup

    Creates the user, its credential account and a session; sets the session cookie.

    Raises:
        - 409 Conflict: Email already exists
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 500 Internal Server Error: Server error
    """
    command = SignupCommand(
        name=body.name,
        email=body.email,
        password=body.password,
        ip_address=client_ip(request),
        user_agent=user_agent(request),
    )

    use_case = SignupUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "EMAIL_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    data = result.value
    # TODO: send data.verification_token by email once a mail backend is wired in
    set_session_cookie(response, data.session_token, data.expires_at)
    return AuthSessionResponse(
        user=data.user, session_id=data.session_id, expires_at=data.expires_at
    )


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post(
    "/sign-in/email",
    status_code=status.HTTP_200_OK,
    response_model=AuthSessionResponse,
)
async def sign_in(
    body: LoginRequest,
    request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Email/Password Login

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 500 Internal Server Error: Server error
    """
    command = LoginCommand(
        email=body.email,
        password=body.password,
        ip_address=client_ip(request),
        user_agent=user_agent(request),
    )

    use_case = LoginUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    data = result.value
    set_session_cookie(response, data.session_token, data.expires_at)
    return AuthSessionResponse(
        user=data.user, session_id=data.session_id, expires_at=data.expires_at
    )


@router.post("/sign-out", status_code=status.HTTP_200_OK, response_model=SignOutResponse)
async def sign_out(
    request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Sign Out

    Deletes the session behind the cookie and clears the cookie. Works for
    sessions minted by either sign-in path.
    """
    token = request.cookies.get(ApplicationConfig.SESSION_COOKIE_NAME)

    use_case = SignOutUseCase(uow)
    result = await use_case.execute(token)

    if result.is_err():
        raise ServerError(result.error)

    clear_session_cookie(response)
    return result.value


class VerifyEmailRequest(BaseModel):
    """Verify email HTTP request payload"""

    token: str = Field(..., description="Email verification token")


@router.post("/verify-email", status_code=status.HTTP_200_OK, response_model=VerifyEmailResponse)
async def verify_email(request: VerifyEmailRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Email Verification

    Sets email_verified and consumes the verification token.

    Raises:
        - 400 Bad Request: Invalid token
        - 410 Gone: Expired token
        - 500 Internal Server Error: Server error
    """
    use_case = VerifyEmailUseCase(uow)
    result = await use_case.execute(request.token)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_TOKEN":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "TOKEN_EXPIRED":
            raise ClientError(error, status_code=status.HTTP_410_GONE)
        raise ServerError(error)

    return result.value
