"""
Signup Use Case DTOs (Data Transfer Objects)

Command/Response pattern for clean architecture separation:
- SignupCommand: Input to use case (validated business intent)
- SignupResponse: Output from use case (structured result)
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class SignupCommand(BaseModel):
    """
    Signup command - represents validated signup intent

    Created by API layer after request validation passes.
    Contains only business-relevant data (no HTTP concerns).
    """

    name: str
    email: str
    password: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


class UserInfo(BaseModel):
    """User information in signup/login responses"""

    id: str
    name: str
    email: str
    email_verified: bool


class SignupResponse(BaseModel):
    """
    Signup response - structured output from use case

    The route moves session_token into the session cookie.
    """

    user: UserInfo
    session_token: str
    session_id: str
    expires_at: datetime
    verification_token: str
