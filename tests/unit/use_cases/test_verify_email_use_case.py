from datetime import timedelta

import pytest

from src.app.use_cases.auth import VerifyEmailUseCase
from src.domain.base import utcnow
from src.domain.entities import User, Verification


def _verification(expires_in: timedelta) -> Verification:
    return Verification(
        identifier="jane.doe@acme.com",
        value="verify-token",
        expires_at=utcnow() + expires_in,
    )


@pytest.mark.asyncio
async def test_successful_verification(mock_uow):
    user = User(name="Jane", email="jane.doe@acme.com", email_verified=False)
    verification = _verification(timedelta(hours=1))
    mock_uow.verifications.get_by_value.return_value = verification
    mock_uow.users.get_by_email.return_value = user

    result = await VerifyEmailUseCase(mock_uow).execute("verify-token")

    assert result.is_ok()
    assert result.value.status == "verified"
    assert user.email_verified is True
    mock_uow.users.update.assert_awaited_once_with(user)
    mock_uow.verifications.delete.assert_awaited_once_with(verification)
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_unknown_token(mock_uow):
    result = await VerifyEmailUseCase(mock_uow).execute("nope")

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_expired_token(mock_uow):
    mock_uow.verifications.get_by_value.return_value = _verification(timedelta(hours=-1))
    mock_uow.users.get_by_email.return_value = User(name="Jane", email="jane.doe@acme.com")

    result = await VerifyEmailUseCase(mock_uow).execute("verify-token")

    assert result.is_err()
    assert result.error.code == "TOKEN_EXPIRED"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_already_verified_user(mock_uow):
    mock_uow.verifications.get_by_value.return_value = _verification(timedelta(hours=-1))
    mock_uow.users.get_by_email.return_value = User(
        name="Jane", email="jane.doe@acme.com", email_verified=True
    )

    result = await VerifyEmailUseCase(mock_uow).execute("verify-token")

    assert result.is_ok()
    assert result.value.message == "Email is already verified"
    mock_uow.users.update.assert_not_called()
