"""
Login Use Case

Authenticates a local user and mints a session shared with the SSO path.
"""

import bcrypt

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.sessions.minting import mint_session
from src.domain.base import utcnow
from src.domain.entities import AccountProvider
from src.libs.result import Error, Result, Return
from .dtos import LoginCommand, LoginResponse
from .signup_dto import UserInfo

# Hash compared against when the email is unknown, so both branches cost the same
_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(12))


class LoginUseCase:
    """
    Use case for email/password login.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - Users without a credential account (SSO-only) cannot log in here
    - Creates new session with a 7-day expiry
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: LoginCommand) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            command: LoginCommand with email, password and requester metadata

        Returns:
            Result with LoginResponse containing the session token, or Error
        """
        invalid = Error("INVALID_CREDENTIALS", "Invalid email or password")

        async with self.uow:
            user = await self.uow.users.get_by_email(command.email)
            account = None
            if user is not None:
                account = await self.uow.accounts.get_by_user_and_provider(
                    user.id, AccountProvider.credential.value
                )

            if account is None or not account.password:
                # Always perform a hash check even if the user is not found
                bcrypt.checkpw(command.password.encode(), _DUMMY_HASH)
                return Return.err(invalid)

            if not bcrypt.checkpw(command.password.encode(), account.password.encode()):
                return Return.err(invalid)

            session = await mint_session(
                self.uow,
                user.id,
                utcnow(),
                ip_address=command.ip_address,
                user_agent=command.user_agent,
            )

            await self.uow.commit()

            return Return.ok(
                LoginResponse(
                    user=UserInfo(
                        id=user.id,
                        name=user.name,
                        email=user.email,
                        email_verified=user.email_verified,
                    ),
                    session_token=session.token,
                    session_id=session.id,
                    expires_at=session.expires_at,
                )
            )
