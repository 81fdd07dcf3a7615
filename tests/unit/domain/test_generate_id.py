from datetime import timedelta

from src.domain.base import ID_ALPHABET, ID_LENGTH, generate_id, utcnow
from src.domain.entities import Session


def test_generated_ids_are_32_alphanumeric_chars():
    token = generate_id()

    assert len(token) == ID_LENGTH == 32
    assert set(token) <= set(ID_ALPHABET)
    assert token.isalnum()


def test_ten_thousand_tokens_are_pairwise_distinct():
    tokens = {generate_id() for _ in range(10_000)}

    assert len(tokens) == 10_000


def test_sessions_get_distinct_tokens_and_ids():
    now = utcnow()
    first = Session(user_id="u1", expires_at=now + timedelta(days=7))
    second = Session(user_id="u1", expires_at=now + timedelta(days=7))

    assert first.token != second.token
    assert first.id != second.id
    assert len(first.token) == 32


def test_session_expiry_is_exclusive_at_boundary():
    now = utcnow()
    session = Session(user_id="u1", expires_at=now)

    assert session.is_expired(now)
    assert not session.is_expired(now - timedelta(seconds=1))
    assert session.is_expired(now + timedelta(seconds=1))


def test_scope_list_splits_on_whitespace():
    session = Session(user_id="u1", expires_at=utcnow(), scopes="openid app.read")

    assert session.scope_list == ["openid", "app.read"]
    assert Session(user_id="u1", expires_at=utcnow()).scope_list == []
