"""
Bearer Verifier

Contract for validating XSUAA access tokens presented by API clients.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from src.app.services.credential_provider import SsoCredentials
from src.libs.result import Result


class XsuaaPrincipal(BaseModel):
    """Caller identity carried by a verified access token"""

    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    client_id: Optional[str] = None
    scopes: List[str] = []

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "XsuaaPrincipal":
        scope = claims.get("scope") or []
        if isinstance(scope, str):
            scope = scope.split()

        given = claims.get("given_name")
        family = claims.get("family_name")
        name = " ".join(part for part in (given, family) if part) or None

        return cls(
            id=claims.get("user_name") or claims.get("sub"),
            email=claims.get("email"),
            name=name,
            client_id=claims.get("client_id") or claims.get("cid"),
            scopes=list(scope),
        )

    def has_scope(self, scope: str, xsappname: Optional[str] = None) -> bool:
        """Local scopes are granted as "<xsappname>.<scope>"; pass xsappname to check one"""
        if xsappname:
            scope = f"{xsappname}.{scope}"
        return scope in self.scopes


class IBearerTokenVerifier(ABC):
    @abstractmethod
    def verify(self, token: str, credentials: SsoCredentials) -> Result[XsuaaPrincipal]:
        """
        Verify an access token issued by the bound XSUAA instance.

        Errors:
            INVALID_BEARER_TOKEN: bad signature, wrong audience, expired or unreadable
            BEARER_VERIFICATION_UNAVAILABLE: no verificationkey bound
        """
        pass
