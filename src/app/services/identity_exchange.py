"""
Identity Exchange

Contract for trading an authorization code for tokens and identity claims.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from pydantic import BaseModel

from src.app.services.credential_provider import SsoCredentials
from src.libs.result import Result


class TokenExchange(BaseModel):
    """Tokens and decoded identity claims returned by the provider"""

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    id_token_claims: Dict[str, Any]
    expires_in: Optional[int] = None
    scope: Optional[str] = None


class IIdentityExchangeClient(ABC):
    @abstractmethod
    async def exchange_code(
        self, code: str, redirect_uri: str, credentials: SsoCredentials
    ) -> Result[TokenExchange]:
        """
        Exchange a single-use authorization code.

        Errors:
            TOKEN_EXCHANGE_FAILED: non-success status, transport error or timeout
            MALFORMED_IDENTITY_TOKEN: id_token missing or undecodable
        """
        pass
