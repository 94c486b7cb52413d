"""
Session Entity

Server-side login session referenced by the session cookie.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now


class Session(SQLModel, table=True):
    """
    Session entity - maps a cookie token to a user.

    Business Rules:
    - Only the SHA-256 of the cookie token is stored
    - Holds nothing but the user identifier; the user is reloaded per request
    - Absolute expiry (24 hours by default), never extended
    - Deleted on logout, password reset, account deletion or when found expired
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    token_hash: str = Field(unique=True, index=True, max_length=64)  # SHA-256 hex
    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (Index("idx_session_expires_at", "expires_at"),)
