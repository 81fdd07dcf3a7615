"""
Auth Domain Entities

One entity per file; the four tables shared by the local and SSO paths.
"""

from .enums import AccountProvider, SsoErrorCode

from .user import User
from .session import Session
from .account import Account
from .verification import Verification

__all__ = [
    # Enums
    "AccountProvider",
    "SsoErrorCode",
    # Entities
    "User",
    "Session",
    "Account",
    "Verification",
]
