"""
Stock opname session domain entities.

A session is one counting exercise at a location; it owns the items scanned
while it was active.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from stockopname.core.clock import utcnow
from stockopname.core.entities.location import Location
from stockopname.core.entities.patch import UNSET, Unset
from stockopname.core.entities.user import User


class SessionStatus(str, Enum):
    """Lifecycle status of a counting session."""

    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not SessionStatus.ACTIVE


class StockOpnameSession(BaseModel):
    """
    One counting session bound to a location and the user conducting it.

    ``completed_at`` is empty exactly while the session is active.
    ``signature_data`` is an opaque encoded image (usually a base64 data URL).
    """

    id: int | None = None
    location_id: int
    user_id: int
    session_name: str
    status: SessionStatus = SessionStatus.ACTIVE

    started_at: datetime = Field(default_factory=utcnow)
    completed_at: datetime | None = None
    signature_data: str | None = Field(default=None, repr=False)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_active(self) -> bool:
        return self.status == SessionStatus.ACTIVE

    @property
    def has_signature(self) -> bool:
        return bool(self.signature_data)


class StockOpnameItem(BaseModel):
    """A single scanned or manually entered count line. Immutable once stored."""

    id: int | None = None
    session_id: int
    sku: str
    lot_number: str
    quantity: int = Field(ge=0)
    barcode_data: str
    scanned_at: datetime = Field(default_factory=utcnow)
    created_at: datetime = Field(default_factory=utcnow)


class SessionWithRelations(StockOpnameSession):
    """Session hydrated with its location, user and complete item set."""

    location: Location
    user: User
    items: list[StockOpnameItem] = Field(default_factory=list)

    @property
    def total_items(self) -> int:
        return len(self.items)

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)


@dataclass(frozen=True)
class SessionPatch:
    """
    Partial update for a session.

    Fields left UNSET are not touched; an explicit None clears the field.
    """

    status: SessionStatus | Unset = UNSET
    signature_data: str | None | Unset = UNSET
    completed_at: datetime | None | Unset = UNSET
