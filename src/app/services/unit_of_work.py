from abc import ABC, abstractmethod

from src.app.repositories.account_repository import IAccountRepository
from src.app.repositories.session_repository import ISessionRepository
from src.app.repositories.user_repository import IUserRepository
from src.app.repositories.verification_repository import IVerificationRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    sessions: ISessionRepository
    accounts: IAccountRepository
    verifications: IVerificationRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass

    @abstractmethod
    async def lock_external_subject(self, subject: str):
        """Serialize concurrent work on one external subject until commit/rollback."""
        pass

    @abstractmethod
    async def ping(self):
        """Round trip to the store. Raises if it is unreachable."""
        pass
