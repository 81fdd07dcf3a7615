from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_xsuaa_subject(self, subject: str) -> Optional[User]:
        """Get user linked to an XSUAA subject"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user. Raises UniqueConstraintViolation on email/subject clash."""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user. Raises UniqueConstraintViolation on subject clash."""
        pass

    @abstractmethod
    async def delete(self, user: User) -> None:
        """Delete a user together with its sessions and accounts"""
        pass
