from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import User


class DuplicateIdentityError(Exception):
    """Username or email collided with an existing row on write"""


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID, always reloaded from storage"""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_reset_token(self, token: str) -> Optional[User]:
        """Get user holding the given password reset token"""
        pass

    @abstractmethod
    async def list_by_business_id(self, business_id: UUID) -> List[User]:
        """Get all users linked to a business"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user. Raises DuplicateIdentityError on a taken username or email."""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user. Raises DuplicateIdentityError on a taken email."""
        pass

    @abstractmethod
    async def delete(self, user_id: UUID) -> bool:
        """Delete a user. Returns True if the user existed."""
        pass

    @abstractmethod
    async def consume_reset_token(
        self, user_id: UUID, token: str, password_hash: str, now: datetime
    ) -> bool:
        """
        Set the password hash and clear the reset token in one conditional update.

        Only applies while the user still holds `token` and it has not expired.
        Returns True if this call consumed the token.
        """
        pass

    @abstractmethod
    async def complete_two_factor(
        self, user_id: UUID, code: str, backup_code_hashes: List[str], now: datetime
    ) -> bool:
        """
        Mark 2FA verified, store backup codes and clear the temp code in one
        conditional update.

        Only applies while the user still holds `code` and it has not expired.
        Returns True if this call consumed the code.
        """
        pass

    @abstractmethod
    async def withdraw_two_factor_code(
        self,
        user_id: UUID,
        issued_code: str,
        enabled: bool,
        code: Optional[str],
        expires_at: Optional[datetime],
    ) -> bool:
        """
        Put back the previous 2FA state after an issued code could not be delivered.

        Only applies while the user still holds `issued_code`, so a newer code
        or a completed verification is never overwritten.
        """
        pass
