"""Infrastructure layer implementations."""

from stockopname.infrastructure import security, storage

__all__ = ["storage", "security"]
