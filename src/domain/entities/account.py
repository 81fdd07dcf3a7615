"""
Account Entity

Links a user to a sign-in provider: XSUAA or local credentials.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, SQLModel, UniqueConstraint

from src.domain.base import generate_id, utcnow


class Account(SQLModel, table=True):
    """
    Account entity - one row per (provider, user).

    Business Rules:
    - xsuaa rows carry the provider tokens from the first SSO login
    - credential rows carry the bcrypt password hash
    """

    __tablename__ = "accounts"

    id: str = Field(default_factory=generate_id, primary_key=True, max_length=32)
    user_id: str = Field(
        foreign_key="users.id", ondelete="CASCADE", nullable=False, index=True
    )
    account_id: str = Field(max_length=255)
    provider_id: str = Field(max_length=32)

    access_token: Optional[str] = Field(default=None)
    refresh_token: Optional[str] = Field(default=None)
    access_token_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )
    password: Optional[str] = Field(default=None, max_length=60)  # Bcrypt output

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        UniqueConstraint("provider_id", "user_id", name="uq_account_provider_user"),
    )
