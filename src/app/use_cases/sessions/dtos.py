"""
Session Use Case DTOs
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class UserView(BaseModel):
    """The user fields exposed to the browser"""

    id: str
    name: str
    email: str
    email_verified: bool
    xsuaa_subject: Optional[str] = None
    image: Optional[str] = None


class SessionView(BaseModel):
    id: str
    expires_at: datetime
    scopes: List[str] = []


class SessionContext(BaseModel):
    """Response for session resolution"""

    user: UserView
    session: SessionView


class SignOutResponse(BaseModel):
    status: str
    message: str
