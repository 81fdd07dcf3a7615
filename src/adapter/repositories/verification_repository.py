from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.errors import translate_db_errors
from src.app.repositories.verification_repository import IVerificationRepository
from src.domain.entities import Verification


class VerificationRepository(IVerificationRepository):
    """Verification repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_value(self, value: str) -> Optional[Verification]:
        stmt = select(Verification).where(Verification.value == value)
        with translate_db_errors():
            result = await self.session.exec(stmt)
            return result.one_or_none()

    async def create(self, verification: Verification) -> Verification:
        with translate_db_errors():
            self.session.add(verification)
            await self.session.flush()
            await self.session.refresh(verification)
        return verification

    async def delete(self, verification: Verification) -> None:
        with translate_db_errors():
            await self.session.delete(verification)
            await self.session.flush()
