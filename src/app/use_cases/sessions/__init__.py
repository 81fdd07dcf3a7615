"""
Session Use Cases

Session resolution and sign-out, shared by both sign-in paths.
"""

from .resolve_session_use_case import ResolveSessionUseCase
from .sign_out_use_case import SignOutUseCase
from .dtos import SessionContext, SessionView, SignOutResponse, UserView

__all__ = [
    # Use Cases
    "ResolveSessionUseCase",
    "SignOutUseCase",
    # DTOs
    "SessionContext",
    "SessionView",
    "SignOutResponse",
    "UserView",
]
