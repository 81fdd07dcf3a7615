"""
Authentication Use Cases

Local email/password business logic.
"""

from .signup_use_case import SignupUseCase
from .signup_dto import SignupCommand, SignupResponse, UserInfo
from .login_use_case import LoginUseCase
from .verify_email_use_case import VerifyEmailUseCase
from .dtos import LoginCommand, LoginResponse, VerifyEmailResponse

__all__ = [
    # Use Cases
    "SignupUseCase",
    "LoginUseCase",
    "VerifyEmailUseCase",
    # DTOs - Commands
    "SignupCommand",
    "LoginCommand",
    # DTOs - Responses
    "SignupResponse",
    "LoginResponse",
    "VerifyEmailResponse",
    # DTOs - Nested Models
    "UserInfo",
]
