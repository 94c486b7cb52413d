"""
Two-Factor Use Case DTOs
"""

from datetime import datetime
from typing import List

from src.app.use_cases.base_dto import CamelModel


class EnableTwoFactorResponse(CamelModel):
    """Response for enable 2FA use case"""

    status: str
    message: str
    expires_at: datetime


class VerifyTwoFactorResponse(CamelModel):
    """
    Response for verify 2FA use case

    The only time backup codes are available in plaintext.
    """

    status: str
    backup_codes: List[str]


class DisableTwoFactorResponse(CamelModel):
    """Response for disable 2FA use case"""

    status: str
    message: str
