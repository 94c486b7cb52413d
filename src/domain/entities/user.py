"""
User Entity

Credential and identity record of a console user.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now
from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - credential/identity aggregate.

    Business Rules:
    - Username and email are each unique across all users
    - Password stored as bcrypt digest, never plaintext
    - reset_token and reset_token_expires_at are set and cleared together
    - two_factor_temp_code and two_factor_temp_expires_at are set and cleared together
    - Backup codes (SHA-256 hashes) are issued once, when 2FA verification succeeds
    - business_id stays null until a business profile is created
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=64)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    role: UserRole = Field(default=UserRole.user)
    business_id: Optional[UUID] = Field(default=None, index=True)

    # Profile
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)

    # Password reset
    reset_token: Optional[str] = Field(
        default=None, unique=True, index=True, max_length=64
    )
    reset_token_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Two-factor authentication
    two_factor_enabled: bool = Field(default=False)
    two_factor_verified: bool = Field(default=False)
    two_factor_temp_code: Optional[str] = Field(default=None, max_length=6)
    two_factor_temp_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )
    backup_codes: Optional[List[str]] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_business_role", "business_id", "role"),)
