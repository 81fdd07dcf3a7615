from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.credential_discovery import CredentialDiscovery
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.adapter.services.xsuaa_client import XsuaaTokenClient
from src.app.services.credential_provider import ICredentialProvider
from src.app.services.identity_exchange import IIdentityExchangeClient


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection"""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


credential_discovery = CredentialDiscovery(ApplicationConfig)

engine = create_async_engine(
    credential_discovery.get_database_url(), echo=False, future=True
)
enable_sqlite_foreign_keys(engine)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

token_client = XsuaaTokenClient(
    timeout=ApplicationConfig.SSO_HTTP_TIMEOUT,
    verify_signature=ApplicationConfig.SSO_VERIFY_ID_TOKEN,
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_credential_provider() -> ICredentialProvider:
    return credential_discovery


def get_identity_exchange_client() -> IIdentityExchangeClient:
    return token_client


async def init_db():
    """Create any missing tables; existing tables are left untouched"""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
