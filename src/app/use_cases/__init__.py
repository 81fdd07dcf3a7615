"""
Use Cases

Organized into domain folders:
- sso/: XSUAA account resolution and session bootstrap
- sessions/: Session resolution and sign-out
- auth/: Local email/password flows
"""

from .sso import ReconcileSsoIdentityUseCase, ReconcileSsoCommand
from .sessions import ResolveSessionUseCase, SignOutUseCase
from .auth import (
    SignupUseCase,
    SignupCommand,
    LoginUseCase,
    LoginCommand,
    VerifyEmailUseCase,
)

__all__ = [
    # SSO
    "ReconcileSsoIdentityUseCase",
    "ReconcileSsoCommand",
    # Sessions
    "ResolveSessionUseCase",
    "SignOutUseCase",
    # Auth
    "SignupUseCase",
    "SignupCommand",
    "LoginUseCase",
    "LoginCommand",
    "VerifyEmailUseCase",
]
