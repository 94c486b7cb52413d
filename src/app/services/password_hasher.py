from abc import ABC, abstractmethod


class PasswordHasher(ABC):
    """
    One-way password hashing.

    Digests embed their own salt and cost parameters, so verification never
    depends on the currently configured cost.
    """

    @abstractmethod
    def hash(self, password: str) -> str:
        """Hash a plaintext password"""
        pass

    @abstractmethod
    def verify(self, password: str, digest: str) -> bool:
        """Constant-time check of a password against a stored digest. False for malformed digests."""
        pass

    @abstractmethod
    def needs_rehash(self, digest: str) -> bool:
        """True if the digest was produced with a lower cost than configured"""
        pass

    @abstractmethod
    def verify_dummy(self, password: str) -> None:
        """Spend one verification's worth of work on a throwaway digest"""
        pass
