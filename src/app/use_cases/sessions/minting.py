from datetime import datetime, timedelta
from typing import Optional

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Session

SESSION_TTL = timedelta(days=7)


async def mint_session(
    uow: UnitOfWork,
    user_id: str,
    now: datetime,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
    scopes: Optional[str] = None,
) -> Session:
    """
    Insert a fresh 7-day session for the user inside the caller's unit of work.

    The user's already-expired sessions are purged first. The caller commits.
    """
    await uow.sessions.delete_expired_for_user(user_id, now)
    return await uow.sessions.create(
        Session(
            user_id=user_id,
            expires_at=now + SESSION_TTL,
            ip_address=ip_address,
            user_agent=user_agent,
            scopes=scopes or None,
            created_at=now,
            updated_at=now,
        )
    )
