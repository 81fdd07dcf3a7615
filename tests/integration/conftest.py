from typing import Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.credential_provider import ICredentialProvider, SsoCredentials
from src.app.services.identity_exchange import IIdentityExchangeClient, TokenExchange
from src.depends import (
    enable_sqlite_foreign_keys,
    get_credential_provider,
    get_identity_exchange_client,
    get_unit_of_work,
)
from src.libs.result import Return
from tests.fixtures.json_loader import TestDataLoader

APP_URL = "http://test"


class FakeCredentialProvider(ICredentialProvider):
    def __init__(self, credentials: Optional[SsoCredentials]):
        self.credentials = credentials

    def get_database_url(self) -> str:
        return "sqlite+aiosqlite://"

    def get_sso_credentials(self) -> Optional[SsoCredentials]:
        return self.credentials

    def get_app_url(self) -> str:
        return APP_URL

    def is_sso_enabled(self) -> bool:
        return self.credentials is not None


class FakeExchangeClient(IIdentityExchangeClient):
    """Returns a canned result and records what it was asked"""

    def __init__(self):
        token_response = TestDataLoader.get_copy("token_response")
        self.result = Return.ok(
            TokenExchange(
                access_token=token_response["access_token"],
                refresh_token=token_response["refresh_token"],
                id_token_claims=TestDataLoader.get_copy("claims_full"),
                expires_in=token_response["expires_in"],
                scope=token_response["scope"],
            )
        )
        self.calls = []

    async def exchange_code(self, code, redirect_uri, credentials):
        self.calls.append((code, redirect_uri, credentials))
        return self.result


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def credential_provider():
    return FakeCredentialProvider(SsoCredentials(**TestDataLoader.get_copy("xsuaa_credentials")))


@pytest.fixture
def exchange_client():
    return FakeExchangeClient()


@pytest.fixture
def app(db_session, credential_provider, exchange_client):
    from src.api.app import create_app

    app = create_app(ApplicationConfig, credential_provider=credential_provider)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_credential_provider] = lambda: credential_provider
    app.dependency_overrides[get_identity_exchange_client] = lambda: exchange_client
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=APP_URL) as ac:
        yield ac
