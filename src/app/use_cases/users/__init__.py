"""
User Management Use Cases

All user-related business logic.
"""

from .update_profile_use_case import UpdateProfileUseCase
from .delete_account_use_case import DeleteAccountUseCase
from .list_business_users_use_case import ListBusinessUsersUseCase
from .change_role_use_case import ChangeRoleUseCase
from .remove_user_use_case import RemoveUserUseCase
from .dtos import UpdateProfileCommand, DeleteUserResponse, BusinessUsersResponse

__all__ = [
    "UpdateProfileUseCase",
    "DeleteAccountUseCase",
    "ListBusinessUsersUseCase",
    "ChangeRoleUseCase",
    "RemoveUserUseCase",
    "UpdateProfileCommand",
    "DeleteUserResponse",
    "BusinessUsersResponse",
]
