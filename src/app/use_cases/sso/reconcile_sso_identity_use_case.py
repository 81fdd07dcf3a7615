"""
Reconcile SSO Identity Use Case

Resolves an external identity to a local user and mints a session for it.
"""

import logging
from datetime import datetime, timedelta

from src.app.repositories.errors import RepositoryError, UniqueConstraintViolation
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.app.use_cases.sessions.minting import mint_session
from src.domain.entities import Account, AccountProvider, User
from src.libs.result import Error, Result, Return
from .dtos import (
    ExternalIdentity,
    ReconcileSsoCommand,
    ResolutionOutcome,
    SsoSessionResponse,
)
from .identity import derive_identity

logger = logging.getLogger(__name__)

DEFAULT_ACCESS_TOKEN_TTL_SECONDS = 3600
MAX_ATTEMPTS = 3


class ReconcileSsoIdentityUseCase:
    """
    Use case for SSO account resolution and session bootstrap.

    Business Rules:
    - Match by xsuaa_subject first, then by email (link in place), else create
    - SSO-provisioned users are email_verified (the IdP vouches for them)
    - The first SSO login of a user records an xsuaa Account row with its tokens
    - Sessions last 7 days; the user's expired sessions are purged on mint
    - One unit of work per attempt, locked on the subject; a unique-constraint
      conflict means a concurrent login won the race, so resolution restarts
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: ReconcileSsoCommand) -> Result[SsoSessionResponse]:
        """
        Execute reconciliation.

        Args:
            command: Decoded claims, provider tokens and requester metadata

        Returns:
            Result[SsoSessionResponse], or Error(MISSING_SUBJECT) for unusable
            claims, or Error(RECONCILIATION_FAILED) for store faults
        """
        identity_result = derive_identity(command.claims)
        if identity_result.is_err():
            logger.warning(f"Rejecting SSO claims: {identity_result.error.message}")
            return identity_result
        identity = identity_result.value

        for attempt in range(1, MAX_ATTEMPTS + 1):
            try:
                return Return.ok(await self._reconcile(identity, command))
            except UniqueConstraintViolation as exc:
                logger.info(
                    f"Concurrent SSO login for subject {identity.subject} "
                    f"(attempt {attempt}/{MAX_ATTEMPTS}): {exc}"
                )
            except RepositoryError as exc:
                logger.error(f"SSO reconciliation failed for subject {identity.subject}: {exc}")
                return Return.err(
                    Error("RECONCILIATION_FAILED", "Could not persist the SSO login")
                )

        logger.error(
            f"SSO reconciliation for subject {identity.subject} kept conflicting "
            f"after {MAX_ATTEMPTS} attempts"
        )
        return Return.err(
            Error("RECONCILIATION_FAILED", "Could not resolve a unique user for the SSO login")
        )

    async def _reconcile(
        self, identity: ExternalIdentity, command: ReconcileSsoCommand
    ) -> SsoSessionResponse:
        async with self.uow:
            await self.uow.lock_external_subject(identity.subject)
            now = utcnow()

            outcome = ResolutionOutcome.returning
            user = await self.uow.users.get_by_xsuaa_subject(identity.subject)

            if user is None:
                user = await self.uow.users.get_by_email(identity.email)
                if user is not None:
                    # Link the SSO identity to the existing local user
                    user.xsuaa_subject = identity.subject
                    user.updated_at = now
                    user = await self.uow.users.update(user)
                    outcome = ResolutionOutcome.linked
                else:
                    user = await self.uow.users.create(
                        User(
                            name=identity.name,
                            email=identity.email,
                            email_verified=True,
                            xsuaa_subject=identity.subject,
                            created_at=now,
                            updated_at=now,
                        )
                    )
                    outcome = ResolutionOutcome.created

                existing_account = await self.uow.accounts.get_by_user_and_provider(
                    user.id, AccountProvider.xsuaa.value
                )
                if existing_account is None:
                    await self.uow.accounts.create(
                        self._build_account(user.id, identity.subject, command, now)
                    )

            session = await mint_session(
                self.uow,
                user.id,
                now,
                ip_address=command.ip_address,
                user_agent=command.user_agent,
                scopes=command.scope,
            )

            await self.uow.commit()

            logger.info(
                f"SSO login resolved ({outcome.value}): user {user.id}, "
                f"subject {identity.subject}"
            )
            return SsoSessionResponse(
                session_token=session.token,
                session_id=session.id,
                expires_at=session.expires_at,
                user_id=user.id,
                outcome=outcome,
            )

    @staticmethod
    def _build_account(
        user_id: str, subject: str, command: ReconcileSsoCommand, now: datetime
    ) -> Account:
        expires_in = command.expires_in or DEFAULT_ACCESS_TOKEN_TTL_SECONDS
        return Account(
            user_id=user_id,
            account_id=subject,
            provider_id=AccountProvider.xsuaa.value,
            access_token=command.access_token,
            refresh_token=command.refresh_token,
            access_token_expires_at=now + timedelta(seconds=expires_in),
            created_at=now,
            updated_at=now,
        )
