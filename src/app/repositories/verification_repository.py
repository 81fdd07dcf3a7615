from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import Verification


class IVerificationRepository(ABC):
    """Verification repository interface - application layer"""

    @abstractmethod
    async def get_by_value(self, value: str) -> Optional[Verification]:
        """Get verification by its token value"""
        pass

    @abstractmethod
    async def create(self, verification: Verification) -> Verification:
        """Create a new verification token"""
        pass

    @abstractmethod
    async def delete(self, verification: Verification) -> None:
        """Delete a consumed verification token"""
        pass
