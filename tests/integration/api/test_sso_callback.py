from urllib.parse import parse_qs, urlsplit

import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import Account, Session, User
from src.libs.result import Error, Return
from tests.utils.cookies import session_cookie, session_headers, session_token

CALLBACK = "/api/auth/xsuaa?action=callback&code=auth-code-1"


@pytest.mark.asyncio
async def test_login_redirects_to_authorize_endpoint(client: AsyncClient):
    response = await client.get("/api/auth/xsuaa", params={"action": "login"})

    assert response.status_code == 307
    location = urlsplit(response.headers["location"])
    assert f"{location.scheme}://{location.netloc}{location.path}" == (
        "https://acme.authentication.eu10.hana.ondemand.com/oauth/authorize"
    )
    assert parse_qs(location.query) == {
        "client_id": ["sb-hybrid-auth!t1234"],
        "redirect_uri": ["http://test/api/auth/xsuaa?action=callback"],
        "response_type": ["code"],
        "scope": ["openid"],
    }


@pytest.mark.asyncio
async def test_first_login_provisions_user_and_sets_cookie(
    client: AsyncClient, db_session, exchange_client
):
    """Fresh provisioning: one verified user, one xsuaa account, one session"""
    response = await client.get(CALLBACK, headers={"user-agent": "pytest-browser"})

    assert response.status_code == 307
    assert response.headers["location"] == "http://test/dashboard"

    cookie = session_cookie(response)
    assert cookie is not None
    morsel = next(iter(cookie.values()))
    assert len(morsel.value) == 32
    assert morsel["httponly"] is True
    assert morsel["samesite"].lower() == "lax"
    assert morsel["path"] == "/"
    assert morsel["expires"]

    code, redirect_uri, _ = exchange_client.calls[0]
    assert code == "auth-code-1"
    assert redirect_uri == "http://test/api/auth/xsuaa?action=callback"

    users = (await db_session.exec(select(User))).all()
    assert len(users) == 1
    assert users[0].email == "jane.doe@acme.com"
    assert users[0].name == "Jane Doe"
    assert users[0].email_verified is True
    assert users[0].xsuaa_subject == "a1b2c3d4-sap-user"

    accounts = (await db_session.exec(select(Account))).all()
    assert [(a.provider_id, a.account_id) for a in accounts] == [("xsuaa", "a1b2c3d4-sap-user")]
    assert accounts[0].refresh_token == "refresh-123"

    session = (await db_session.exec(select(Session))).one()
    assert session.token == morsel.value
    assert session.user_agent == "pytest-browser"


@pytest.mark.asyncio
async def test_returning_login_reuses_user(client: AsyncClient, db_session):
    first = await client.get(CALLBACK)
    second = await client.get(CALLBACK)

    assert session_token(first) != session_token(second)
    assert len((await db_session.exec(select(User))).all()) == 1
    assert len((await db_session.exec(select(Account))).all()) == 1
    assert len((await db_session.exec(select(Session))).all()) == 2


@pytest.mark.asyncio
async def test_sso_links_existing_local_user(client: AsyncClient, db_session):
    signup = await client.post("/api/auth/sign-up/email", json={
        "name": "Jane Local",
        "email": "jane.doe@acme.com",
        "password": "SecurePass123!",
    })
    assert signup.status_code == 201
    local_user_id = signup.json()["user"]["id"]

    response = await client.get(CALLBACK)
    assert response.status_code == 307

    me = await client.get("/api/me", headers=session_headers(session_token(response)))
    assert me.status_code == 200
    assert me.json()["user"]["id"] == local_user_id
    assert me.json()["user"]["xsuaa_subject"] == "a1b2c3d4-sap-user"

    providers = sorted(a.provider_id for a in (await db_session.exec(select(Account))).all())
    assert providers == ["credential", "xsuaa"]
    assert len((await db_session.exec(select(User))).all()) == 1


@pytest.mark.asyncio
async def test_missing_code(client: AsyncClient, exchange_client):
    response = await client.get("/api/auth/xsuaa", params={"action": "callback"})

    assert response.status_code == 307
    assert response.headers["location"] == "http://test/login?error=no_code"
    assert exchange_client.calls == []


@pytest.mark.asyncio
async def test_token_exchange_failure(client: AsyncClient, db_session, exchange_client):
    exchange_client.result = Return.err(Error("TOKEN_EXCHANGE_FAILED", "401 from token endpoint"))

    response = await client.get(CALLBACK)

    assert response.status_code == 307
    assert response.headers["location"] == "http://test/login?error=token_exchange_failed"
    assert session_cookie(response) is None
    assert (await db_session.exec(select(User))).all() == []


@pytest.mark.asyncio
async def test_malformed_identity_token(client: AsyncClient, exchange_client):
    exchange_client.result = Return.err(Error("MALFORMED_IDENTITY_TOKEN", "bad id_token"))

    response = await client.get(CALLBACK)

    assert response.headers["location"] == "http://test/login?error=callback_failed"


@pytest.mark.asyncio
async def test_claims_without_subject_write_nothing(client: AsyncClient, db_session, exchange_client):
    exchange = exchange_client.result.value
    exchange_client.result = Return.ok(
        exchange.model_copy(update={"id_token_claims": {"email": "nobody@acme.com"}})
    )

    response = await client.get(CALLBACK)

    assert response.status_code == 307
    assert response.headers["location"] == "http://test/login?error=callback_failed"
    assert (await db_session.exec(select(User))).all() == []
    assert (await db_session.exec(select(Session))).all() == []


@pytest.mark.asyncio
async def test_unexpected_exchange_error_is_callback_failed(client: AsyncClient, exchange_client):
    async def boom(code, redirect_uri, credentials):
        raise RuntimeError("socket closed")

    exchange_client.exchange_code = boom

    response = await client.get(CALLBACK)

    assert response.status_code == 307
    assert response.headers["location"] == "http://test/login?error=callback_failed"


@pytest.mark.asyncio
@pytest.mark.parametrize("action", ["login", "callback", "bogus"])
async def test_sso_not_configured(client: AsyncClient, credential_provider, action):
    credential_provider.credentials = None

    response = await client.get("/api/auth/xsuaa", params={"action": action})

    assert response.status_code == 307
    assert response.headers["location"] == "http://test/login?error=xsuaa_not_configured"


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [{"action": "logout"}, {}])
async def test_invalid_action(client: AsyncClient, params):
    response = await client.get("/api/auth/xsuaa", params=params)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_ACTION"


@pytest.mark.asyncio
async def test_error_code_messages(client: AsyncClient):
    response = await client.get("/api/auth/error", params={"code": "token_exchange_failed"})

    assert response.status_code == 200
    assert response.json() == {
        "code": "token_exchange_failed",
        "message": "Failed to exchange token with SAP",
    }

    unknown = await client.get("/api/auth/error", params={"code": "nope"})
    assert unknown.status_code == 404
    assert unknown.json()["error"]["code"] == "UNKNOWN_ERROR_CODE"
