"""Location domain entities."""

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, Field

from stockopname.core.clock import utcnow
from stockopname.core.entities.patch import UNSET, Unset


class Location(BaseModel):
    """A physical place where stock is counted.

    ``code`` is unique and never changes once the location exists.
    """

    id: int | None = None
    name: str
    code: str
    description: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


@dataclass(frozen=True)
class LocationPatch:
    """Partial update for a location's mutable fields."""

    name: str | Unset = UNSET
    description: str | None | Unset = UNSET
