from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import delete, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import DuplicateIdentityError, IUserRepository
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID, overwriting any copy already in the identity map"""
        stmt = (
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username"""
        stmt = select(User).where(User.username == username)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_reset_token(self, token: str) -> Optional[User]:
        """Get user holding the given password reset token"""
        stmt = select(User).where(User.reset_token == token)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_business_id(self, business_id: UUID) -> List[User]:
        """Get all users linked to a business, oldest first"""
        stmt = (
            select(User)
            .where(User.business_id == business_id)
            .order_by(User.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self._flush_unique()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self._flush_unique()
        await self.session.refresh(user)
        return user

    async def _flush_unique(self):
        # The unique indexes on username/email settle races the read-side checks miss
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise DuplicateIdentityError(str(exc.orig)) from exc

    async def delete(self, user_id: UUID) -> bool:
        """Delete a user by ID"""
        stmt = delete(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def consume_reset_token(
        self, user_id: UUID, token: str, password_hash: str, now: datetime
    ) -> bool:
        """Conditional update: new password hash + cleared token, if token still valid"""
        stmt = (
            update(User)
            .where(
                User.id == user_id,
                User.reset_token == token,
                User.reset_token_expires_at >= now,
            )
            .values(
                password_hash=password_hash,
                reset_token=None,
                reset_token_expires_at=None,
            )
        )
        result = await self.session.exec(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def complete_two_factor(
        self, user_id: UUID, code: str, backup_code_hashes: List[str], now: datetime
    ) -> bool:
        """Conditional update: verified + backup codes + cleared temp code, if code still valid"""
        stmt = (
            update(User)
            .where(
                User.id == user_id,
                User.two_factor_temp_code == code,
                User.two_factor_temp_expires_at >= now,
            )
            .values(
                two_factor_verified=True,
                backup_codes=backup_code_hashes,
                two_factor_temp_code=None,
                two_factor_temp_expires_at=None,
            )
        )
        result = await self.session.exec(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def withdraw_two_factor_code(
        self,
        user_id: UUID,
        issued_code: str,
        enabled: bool,
        code: Optional[str],
        expires_at: Optional[datetime],
    ) -> bool:
        stmt = (
            update(User)
            .where(User.id == user_id, User.two_factor_temp_code == issued_code)
            .values(
                two_factor_enabled=enabled,
                two_factor_temp_code=code,
                two_factor_temp_expires_at=expires_at,
            )
        )
        result = await self.session.exec(stmt)
        await self.session.flush()
        return result.rowcount == 1
