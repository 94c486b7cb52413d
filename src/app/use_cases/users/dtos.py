"""
User Management Use Case DTOs
"""

from typing import List, Optional

from pydantic import BaseModel

from src.app.use_cases.auth.dtos import UserPrincipal
from src.app.use_cases.base_dto import CamelModel


class UpdateProfileCommand(BaseModel):
    """Profile changes; None leaves a field untouched"""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None


class DeleteUserResponse(CamelModel):
    """Response for account deletion and member removal"""

    status: str
    user_id: str
    sessions_revoked: int


class BusinessUsersResponse(CamelModel):
    """Members of the caller's business"""

    users: List[UserPrincipal]
