"""
User Entity

Represents a person who signs in locally, through SSO, or both.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import generate_id, utcnow


class User(SQLModel, table=True):
    """
    User entity - identity record shared by the local and SSO sign-in paths.

    Business Rules:
    - Email must be unique across all users
    - xsuaa_subject, when set, identifies at most one user
    - Users provisioned through SSO start with email_verified=True
    - Deleting a user cascades to its sessions and accounts
    """

    __tablename__ = "users"

    id: str = Field(default_factory=generate_id, primary_key=True, max_length=32)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    email_verified: bool = Field(default=False)

    # Link to the XSUAA identity (token "sub" claim)
    xsuaa_subject: Optional[str] = Field(
        default=None, unique=True, index=True, max_length=255
    )
    image: Optional[str] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
