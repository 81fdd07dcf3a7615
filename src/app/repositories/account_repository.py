from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import Account


class IAccountRepository(ABC):
    """Account repository interface - application layer"""

    @abstractmethod
    async def get_by_user_and_provider(
        self, user_id: str, provider_id: str
    ) -> Optional[Account]:
        """Get the account a user holds with a provider"""
        pass

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """Create a new account. Raises UniqueConstraintViolation on (provider, user) clash."""
        pass
