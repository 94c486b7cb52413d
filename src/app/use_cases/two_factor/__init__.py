"""
Two-Factor Use Cases

Email-code two-factor enable / verify / disable.
"""

from .enable_two_factor_use_case import EnableTwoFactorUseCase
from .verify_two_factor_use_case import VerifyTwoFactorUseCase
from .disable_two_factor_use_case import DisableTwoFactorUseCase
from .dtos import (
    EnableTwoFactorResponse,
    VerifyTwoFactorResponse,
    DisableTwoFactorResponse,
)

__all__ = [
    # Use Cases
    "EnableTwoFactorUseCase",
    "VerifyTwoFactorUseCase",
    "DisableTwoFactorUseCase",
    # DTOs - Responses
    "EnableTwoFactorResponse",
    "VerifyTwoFactorResponse",
    "DisableTwoFactorResponse",
]
