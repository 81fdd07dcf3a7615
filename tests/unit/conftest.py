import pytest
from unittest.mock import AsyncMock, MagicMock


def _returns_argument(obj):
    return obj


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    uow.lock_external_subject = AsyncMock()
    uow.ping = AsyncMock()

    # Mock repositories
    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_xsuaa_subject = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=_returns_argument)
    uow.users.update = AsyncMock(side_effect=_returns_argument)

    uow.sessions = MagicMock()
    uow.sessions.get_by_token = AsyncMock(return_value=None)
    uow.sessions.create = AsyncMock(side_effect=_returns_argument)
    uow.sessions.delete_by_token = AsyncMock(return_value=True)
    uow.sessions.delete_expired_for_user = AsyncMock(return_value=0)

    uow.accounts = MagicMock()
    uow.accounts.get_by_user_and_provider = AsyncMock(return_value=None)
    uow.accounts.create = AsyncMock(side_effect=_returns_argument)

    uow.verifications = MagicMock()
    uow.verifications.get_by_value = AsyncMock(return_value=None)
    uow.verifications.create = AsyncMock(side_effect=_returns_argument)
    uow.verifications.delete = AsyncMock()

    return uow
