"""Credential hashing implementations."""

from stockopname.infrastructure.security.password_hasher import (
    BcryptPasswordHasher,
    get_password_hasher,
)

__all__ = ["BcryptPasswordHasher", "get_password_hasher"]
