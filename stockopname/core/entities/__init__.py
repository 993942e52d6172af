"""Core domain entities."""

from stockopname.core.entities.location import Location, LocationPatch
from stockopname.core.entities.patch import UNSET, Unset, is_set, provided_fields
from stockopname.core.entities.session import (
    SessionPatch,
    SessionStatus,
    SessionWithRelations,
    StockOpnameItem,
    StockOpnameSession,
)
from stockopname.core.entities.user import User, UserCredentials

__all__ = [
    # Location entities
    "Location",
    "LocationPatch",
    # User entities
    "User",
    "UserCredentials",
    # Session entities
    "SessionStatus",
    "StockOpnameSession",
    "StockOpnameItem",
    "SessionWithRelations",
    "SessionPatch",
    # Patch helpers
    "UNSET",
    "Unset",
    "is_set",
    "provided_fields",
]
