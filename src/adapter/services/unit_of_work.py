from sqlalchemy import text
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.account_repository import AccountRepository
from src.adapter.repositories.errors import translate_db_errors
from src.adapter.repositories.session_repository import SessionRepository
from src.adapter.repositories.user_repository import UserRepository
from src.adapter.repositories.verification_repository import VerificationRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.accounts = AccountRepository(self.session)
        self.verifications = VerificationRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        with translate_db_errors():
            await self.session.commit()

    async def rollback(self):
        await self.session.rollback()

    async def lock_external_subject(self, subject: str):
        # Transaction-scoped advisory lock; SQLite serializes writers on its own
        if self.session.bind is None or self.session.bind.dialect.name != "postgresql":
            return
        with translate_db_errors():
            await self.session.execute(
                text("SELECT pg_advisory_xact_lock(hashtext(:subject))"),
                {"subject": subject},
            )

    async def ping(self):
        with translate_db_errors():
            await self.session.execute(text("SELECT 1"))
