"""
Random secrets used by the authentication flows.

All values come from the `secrets` CSPRNG.
"""

import hashlib
import secrets
import string

BACKUP_CODE_ALPHABET = string.ascii_uppercase + string.digits
BACKUP_CODE_LENGTH = 8
VERIFICATION_CODE_DIGITS = 6


def generate_session_token() -> str:
    return secrets.token_urlsafe(32)


def generate_reset_token() -> str:
    """32 random bytes, hex encoded (64 chars)"""
    return secrets.token_hex(32)


def generate_verification_code() -> str:
    """Uniformly random fixed-width numeric code, leading zeros kept"""
    return f"{secrets.randbelow(10 ** VERIFICATION_CODE_DIGITS):0{VERIFICATION_CODE_DIGITS}d}"


def generate_backup_codes(count: int) -> list[str]:
    """Independent alphanumeric codes, unique within the batch"""
    codes: list[str] = []
    while len(codes) < count:
        code = "".join(
            secrets.choice(BACKUP_CODE_ALPHABET) for _ in range(BACKUP_CODE_LENGTH)
        )
        if code not in codes:
            codes.append(code)
    return codes


def hash_secret(value: str) -> str:
    """SHA-256 hex digest used to store tokens and codes at rest"""
    return hashlib.sha256(value.encode()).hexdigest()
