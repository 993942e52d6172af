"""Abstract interface for password hashing."""

from abc import ABC, abstractmethod


class IPasswordHasher(ABC):
    """Hashes and verifies passwords. The hash format is opaque to the core."""

    @abstractmethod
    def hash(self, password: str) -> str:
        """Return a storable hash for the password."""
        pass

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        """Return True if the password matches the hash. Never raises on mismatch."""
        pass
