import base64
import hashlib

import bcrypt

from src.app.services.password_hasher import PasswordHasher


class BcryptPasswordHasher(PasswordHasher):
    """
    bcrypt over a SHA-256 pre-hash of the password.

    bcrypt only looks at the first 72 bytes of its input; the base64 SHA-256
    pre-hash is 44 bytes, so long passwords are neither truncated nor rejected.
    The cost factor lives inside each digest ("$2b$12$...").
    """

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._dummy_digest = None

    @staticmethod
    def _prehash(password: str) -> bytes:
        return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())

    def hash(self, password: str) -> str:
        digest = bcrypt.hashpw(self._prehash(password), bcrypt.gensalt(self.rounds))
        return digest.decode("utf-8")

    def verify(self, password: str, digest: str) -> bool:
        try:
            return bcrypt.checkpw(self._prehash(password), digest.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            # Malformed or missing digest
            return False

    def verify_dummy(self, password: str) -> None:
        if self._dummy_digest is None:
            self._dummy_digest = self.hash("dummy_password")
        self.verify(password, self._dummy_digest)

    def needs_rehash(self, digest: str) -> bool:
        try:
            rounds = int(digest.split("$")[2])
        except (IndexError, ValueError, AttributeError):
            return True
        return rounds < self.rounds
