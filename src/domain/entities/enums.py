"""
Auth Domain Enums

Enumeration types shared by entities and use cases.
"""

from enum import Enum


class AccountProvider(str, Enum):
    """Source of a linked account row"""

    credential = "credential"
    xsuaa = "xsuaa"


class SsoErrorCode(str, Enum):
    """Error codes handed to the login page via ?error="""

    no_code = "no_code"
    token_exchange_failed = "token_exchange_failed"
    callback_failed = "callback_failed"
    xsuaa_not_configured = "xsuaa_not_configured"

    @property
    def message(self) -> str:
        return _SSO_ERROR_MESSAGES[self]


_SSO_ERROR_MESSAGES = {
    SsoErrorCode.no_code: "Authorization code not received from SAP",
    SsoErrorCode.token_exchange_failed: "Failed to exchange token with SAP",
    SsoErrorCode.callback_failed: "SAP login callback failed",
    SsoErrorCode.xsuaa_not_configured: "SAP login is only available when deployed to Cloud Foundry",
}
