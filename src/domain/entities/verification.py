"""
Verification Entity

Pending email verification tokens for locally registered users.
"""

from datetime import datetime

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import generate_id, utcnow


class Verification(SQLModel, table=True):
    __tablename__ = "verifications"

    id: str = Field(default_factory=generate_id, primary_key=True, max_length=32)
    identifier: str = Field(index=True, max_length=255)
    value: str = Field(unique=True, index=True, max_length=64)
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
