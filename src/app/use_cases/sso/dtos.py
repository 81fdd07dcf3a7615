"""
SSO Use Case DTOs (Data Transfer Objects)

Command/Response pair for the reconciliation use case.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel

from src.app.services.identity_exchange import TokenExchange


class ExternalIdentity(BaseModel):
    """Identity fields derived from provider claims"""

    subject: str
    email: str
    name: str


class ReconcileSsoCommand(BaseModel):
    """
    Reconcile command - decoded claims plus the tokens they arrived with

    Created by the callback route after a successful code exchange.
    """

    claims: Dict[str, Any]
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    scope: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    @classmethod
    def from_exchange(
        cls,
        exchange: TokenExchange,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> "ReconcileSsoCommand":
        return cls(
            claims=exchange.id_token_claims,
            access_token=exchange.access_token,
            refresh_token=exchange.refresh_token,
            expires_in=exchange.expires_in,
            scope=exchange.scope,
            ip_address=ip_address,
            user_agent=user_agent,
        )


class ResolutionOutcome(str, Enum):
    """How the external identity was matched to a local user"""

    returning = "returning"
    linked = "linked"
    created = "created"


class SsoSessionResponse(BaseModel):
    """Freshly minted session for the resolved user"""

    session_token: str
    session_id: str
    expires_at: datetime
    user_id: str
    outcome: ResolutionOutcome
