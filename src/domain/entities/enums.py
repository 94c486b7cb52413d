"""
Domain Enums

Enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Authorization scope of a user within its business"""

    user = "user"
    admin = "admin"
