"""
SSO Use Cases

Account resolution and session bootstrap for XSUAA logins.
"""

from .dtos import (
    ExternalIdentity,
    ReconcileSsoCommand,
    ResolutionOutcome,
    SsoSessionResponse,
)
from .identity import PLACEHOLDER_EMAIL_DOMAIN, derive_identity
from .reconcile_sso_identity_use_case import ReconcileSsoIdentityUseCase

__all__ = [
    "ReconcileSsoIdentityUseCase",
    "derive_identity",
    "PLACEHOLDER_EMAIL_DOMAIN",
    "ExternalIdentity",
    "ReconcileSsoCommand",
    "ResolutionOutcome",
    "SsoSessionResponse",
]
