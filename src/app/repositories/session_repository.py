from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from src.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[Session]:
        """Get session by exact token match"""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: str) -> List[Session]:
        """Get all sessions for a user"""
        pass

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def delete_by_token(self, token: str) -> bool:
        """Delete a session. Returns True if a row was removed."""
        pass

    @abstractmethod
    async def delete_expired_for_user(self, user_id: str, now: datetime) -> int:
        """Delete a user's sessions that expired before now. Returns count."""
        pass
