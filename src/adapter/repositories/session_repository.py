from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.errors import translate_db_errors
from src.app.repositories.session_repository import ISessionRepository
from src.domain.entities import Session


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_token(self, token: str) -> Optional[Session]:
        """Get session by exact token match"""
        stmt = select(Session).where(Session.token == token)
        with translate_db_errors():
            result = await self.session.execute(stmt)
            return result.scalar_one_or_none()

    async def get_by_user_id(self, user_id: str) -> List[Session]:
        """Get all sessions for a user"""
        stmt = select(Session).where(Session.user_id == user_id)
        with translate_db_errors():
            result = await self.session.execute(stmt)
            return list(result.scalars().all())

    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        with translate_db_errors():
            self.session.add(session_obj)
            await self.session.flush()
            await self.session.refresh(session_obj)
        return session_obj

    async def delete_by_token(self, token: str) -> bool:
        """Delete a session by token"""
        stmt = delete(Session).where(Session.token == token)
        with translate_db_errors():
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount > 0

    async def delete_expired_for_user(self, user_id: str, now: datetime) -> int:
        """Delete a user's sessions whose expiry has passed"""
        stmt = delete(Session).where(
            Session.user_id == user_id, Session.expires_at <= now
        )
        with translate_db_errors():
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount
