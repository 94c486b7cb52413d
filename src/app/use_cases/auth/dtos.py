"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.app.use_cases.base_dto import CamelModel
from src.domain.entities import User, UserRole


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    """

    username: str
    email: str
    password: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class UserPrincipal(CamelModel):
    """
    Authenticated user as seen by request handlers and clients.

    Carries every persisted user field except secrets: no password hash,
    reset token, temporary 2FA code or backup codes.
    """

    id: str
    username: str
    email: str
    role: str
    business_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    two_factor_enabled: bool
    two_factor_verified: bool
    created_at: datetime
    last_login_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserPrincipal":
        return cls(
            id=str(user.id),
            username=user.username,
            email=user.email,
            role=UserRole(user.role).value,
            business_id=str(user.business_id) if user.business_id else None,
            first_name=user.first_name,
            last_name=user.last_name,
            two_factor_enabled=user.two_factor_enabled,
            two_factor_verified=user.two_factor_verified,
            created_at=user.created_at,
            last_login_at=user.last_login_at,
        )


class RequestPasswordResetResponse(CamelModel):
    """Response for request password reset use case"""

    message: str
    # Only populated when debug tokens are exposed (tests, diagnostics)
    debug_token: Optional[str] = None


class ResetPasswordResponse(CamelModel):
    """Response for reset password use case"""

    status: str
    message: str
