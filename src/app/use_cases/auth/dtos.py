"""
Authentication Use Case DTOs (Data Transfer Objects)

Command and Response classes for the local email/password path.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from .signup_dto import UserInfo


class LoginCommand(BaseModel):
    """Login command - credentials plus requester metadata"""

    email: str
    password: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


class LoginResponse(BaseModel):
    """Response for user login use case"""

    user: UserInfo
    session_token: str
    session_id: str
    expires_at: datetime


class VerifyEmailResponse(BaseModel):
    """Response for email verification use case"""

    status: str
    message: str
