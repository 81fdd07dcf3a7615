"""
Credential Provider

Typed view over the service bindings the application runs with.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel, ConfigDict


class SsoCredentials(BaseModel):
    """Credentials of a bound XSUAA service instance"""

    model_config = ConfigDict(frozen=True, extra="ignore")

    clientid: str
    clientsecret: str
    url: str
    uaadomain: Optional[str] = None
    verificationkey: Optional[str] = None
    xsappname: Optional[str] = None
    identityzone: Optional[str] = None
    zoneid: Optional[str] = None


class ICredentialProvider(ABC):
    """Read-only lookups resolved once per process"""

    @abstractmethod
    def get_database_url(self) -> str:
        pass

    @abstractmethod
    def get_sso_credentials(self) -> Optional[SsoCredentials]:
        """Bound XSUAA credentials, or None when SSO is not provisioned"""
        pass

    @abstractmethod
    def get_app_url(self) -> str:
        """Public base URL of the application, without trailing slash"""
        pass

    @abstractmethod
    def is_sso_enabled(self) -> bool:
        pass
