import logging
import secrets
from datetime import timedelta

import bcrypt

from src.app.repositories.errors import RepositoryError, UniqueConstraintViolation
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.sessions.minting import mint_session
from src.domain.base import utcnow
from src.domain.entities import Account, AccountProvider, User, Verification
from src.libs.result import Error, Result, Return
from .signup_dto import SignupCommand, SignupResponse, UserInfo

logger = logging.getLogger(__name__)

VERIFICATION_TTL = timedelta(days=1)

EMAIL_ALREADY_EXISTS = Error("EMAIL_ALREADY_EXISTS", "Email already registered")


class SignupUseCase:
    """
    Signup Use Case - local email/password registration

    Command/Response Pattern:
    - Input: SignupCommand (validated business intent)
    - Output: Result[SignupResponse] (structured response)

    Business Logic:
    1. Check if email already exists
    2. Hash password with bcrypt cost factor 12
    3. Create User with email_verified=False
    4. Create credential Account holding the hash
    5. Create Verification token (expires in 24 hours)
    6. Create Session (expires in 7 days)
    7. Commit transaction atomically

    A concurrent signup for the same email that commits first makes this one
    fail on the unique email index; that is reported as EMAIL_ALREADY_EXISTS.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: SignupCommand) -> Result[SignupResponse]:
        """
        Execute signup use case

        Args:
            command: SignupCommand with validated name, email, password

        Returns:
            Result[SignupResponse] with user data and session token,
            Error(EMAIL_ALREADY_EXISTS) if the email is taken, or
            Error(SIGNUP_FAILED) if the store fails
        """
        try:
            return await self._register(command)
        except UniqueConstraintViolation as exc:
            logger.info(f"Signup for {command.email} lost to a concurrent signup: {exc}")
            return Return.err(EMAIL_ALREADY_EXISTS)
        except RepositoryError as exc:
            logger.error(f"Signup for {command.email} failed: {exc}")
            return Return.err(Error("SIGNUP_FAILED", "Could not create the account"))

    async def _register(self, command: SignupCommand) -> Result[SignupResponse]:
        async with self.uow:
            existing_user = await self.uow.users.get_by_email(command.email)
            if existing_user:
                return Return.err(EMAIL_ALREADY_EXISTS)

            now = utcnow()

            password_hash = bcrypt.hashpw(
                command.password.encode("utf-8"), bcrypt.gensalt(12)
            )

            user = await self.uow.users.create(
                User(
                    name=command.name,
                    email=command.email,
                    email_verified=False,
                    created_at=now,
                    updated_at=now,
                )
            )

            await self.uow.accounts.create(
                Account(
                    user_id=user.id,
                    account_id=user.id,
                    provider_id=AccountProvider.credential.value,
                    password=password_hash.decode("utf-8"),
                    created_at=now,
                    updated_at=now,
                )
            )

            # Email verification token (cryptographically secure)
            verification = await self.uow.verifications.create(
                Verification(
                    identifier=user.email,
                    value=secrets.token_urlsafe(32),
                    expires_at=now + VERIFICATION_TTL,
                    created_at=now,
                    updated_at=now,
                )
            )

            session = await mint_session(
                self.uow,
                user.id,
                now,
                ip_address=command.ip_address,
                user_agent=command.user_agent,
            )

            await self.uow.commit()

            logger.info(f"Registered local user {user.id}")

            return Return.ok(
                SignupResponse(
                    user=UserInfo(
                        id=user.id,
                        name=user.name,
                        email=user.email,
                        email_verified=user.email_verified,
                    ),
                    session_token=session.token,
                    session_id=session.id,
                    expires_at=session.expires_at,
                    verification_token=verification.value,
                )
            )
