"""
Resolve Session Use Case

Authoritative session check behind the session cookie.
"""

import logging
from typing import Optional

from src.app.repositories.errors import RepositoryError
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.libs.result import Error, Result, Return
from .dtos import SessionContext, SessionView, UserView

logger = logging.getLogger(__name__)


class ResolveSessionUseCase:
    """
    Use case for turning a session token into the signed-in user.

    Business Rules:
    - Token must match a session row exactly
    - Session is valid while now < expires_at; expired rows are left in place
    - The owning user must still exist
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: Optional[str]) -> Result[SessionContext]:
        """
        Execute session resolution.

        Args:
            token: Raw session cookie value, if any

        Returns:
            Result[SessionContext], or Error with one of NO_SESSION,
            INVALID_SESSION, SESSION_EXPIRED, ORPHANED_SESSION,
            SESSION_LOOKUP_FAILED
        """
        if not token:
            return Return.err(Error("NO_SESSION", "No session token presented"))

        try:
            async with self.uow:
                session = await self.uow.sessions.get_by_token(token)
                if session is None:
                    return Return.err(Error("INVALID_SESSION", "Session not found"))

                if session.is_expired(utcnow()):
                    return Return.err(Error("SESSION_EXPIRED", "Session has expired"))

                user = await self.uow.users.get_by_id(session.user_id)
                if user is None:
                    logger.error(f"Session {session.id} points at missing user {session.user_id}")
                    return Return.err(
                        Error("ORPHANED_SESSION", "Session owner no longer exists")
                    )

                return Return.ok(
                    SessionContext(
                        user=UserView(
                            id=user.id,
                            name=user.name,
                            email=user.email,
                            email_verified=user.email_verified,
                            xsuaa_subject=user.xsuaa_subject,
                            image=user.image,
                        ),
                        session=SessionView(
                            id=session.id,
                            expires_at=session.expires_at,
                            scopes=session.scope_list,
                        ),
                    )
                )
        except RepositoryError as exc:
            logger.error(f"Session lookup failed: {exc}")
            return Return.err(Error("SESSION_LOOKUP_FAILED", "Could not load session"))
