"""
Session Entity

Bearer-token grant of identity, held by the browser as a cookie.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import generate_id, utcnow


class Session(SQLModel, table=True):
    """
    Session entity - opaque token looked up directly on every request.

    Business Rules:
    - Token is 32 alphanumeric chars from a CSPRNG, stored as-is
    - Valid iff the row exists and now < expires_at
    - Expired rows are kept on lookup and purged when the user signs in again
    - Deleting the owning user deletes its sessions
    """

    __tablename__ = "sessions"

    id: str = Field(default_factory=generate_id, primary_key=True, max_length=32)
    user_id: str = Field(
        foreign_key="users.id", ondelete="CASCADE", nullable=False, index=True
    )
    token: str = Field(
        default_factory=generate_id, unique=True, index=True, max_length=32
    )
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    # Audit only
    ip_address: Optional[str] = Field(default=None, max_length=255)
    user_agent: Optional[str] = Field(default=None)

    # Space-separated scopes granted by the identity provider
    scopes: Optional[str] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_session_expires_at", "expires_at"),)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now

    @property
    def scope_list(self) -> list[str]:
        return self.scopes.split() if self.scopes else []
