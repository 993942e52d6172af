"""Core interfaces (ports) for dependency injection."""

from stockopname.core.clock import IClock
from stockopname.core.interfaces.security import IPasswordHasher
from stockopname.core.interfaces.storage import (
    IItemStore,
    ILocationStore,
    ISessionStore,
    IUserStore,
)

__all__ = [
    # Storage interfaces
    "ILocationStore",
    "IUserStore",
    "ISessionStore",
    "IItemStore",
    # Security interfaces
    "IPasswordHasher",
    # Time
    "IClock",
]
