"""
Session Use Cases

Server-side session lifecycle behind the session cookie.
"""

from .establish_session_use_case import EstablishSessionUseCase
from .restore_session_use_case import RestoreSessionUseCase
from .destroy_session_use_case import DestroySessionUseCase
from .dtos import IssuedSession

__all__ = [
    "EstablishSessionUseCase",
    "RestoreSessionUseCase",
    "DestroySessionUseCase",
    "IssuedSession",
]
