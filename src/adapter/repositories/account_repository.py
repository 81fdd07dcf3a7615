from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.errors import translate_db_errors
from src.app.repositories.account_repository import IAccountRepository
from src.domain.entities import Account


class AccountRepository(IAccountRepository):
    """Account repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_and_provider(
        self, user_id: str, provider_id: str
    ) -> Optional[Account]:
        """Get the account a user holds with a provider"""
        stmt = select(Account).where(
            Account.user_id == user_id, Account.provider_id == provider_id
        )
        with translate_db_errors():
            result = await self.session.exec(stmt)
            return result.one_or_none()

    async def create(self, account: Account) -> Account:
        """Create a new account"""
        with translate_db_errors():
            self.session.add(account)
            await self.session.flush()
            await self.session.refresh(account)
        return account
