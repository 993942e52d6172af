"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
None of them carries password material.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from stockopname.core.entities import SessionStatus


class UserResponse(BaseModel):
    """Public view of a user."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    full_name: str
    created_at: datetime
    updated_at: datetime


class LocationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    code: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class LocationListResponse(BaseModel):
    locations: list[LocationResponse]
    total: int


class ItemResponse(BaseModel):
    """One counted item."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    session_id: int
    sku: str
    lot_number: str
    quantity: int
    barcode_data: str
    scanned_at: datetime
    created_at: datetime


class ItemListResponse(BaseModel):
    session_id: int
    items: list[ItemResponse]
    total: int


class SessionResponse(BaseModel):
    """Stock opname session without relations."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    location_id: int
    user_id: int
    session_name: str
    status: SessionStatus
    started_at: datetime
    completed_at: datetime | None = None
    signature_data: str | None = None
    created_at: datetime
    updated_at: datetime


class SessionDetailResponse(SessionResponse):
    """Session with its location, user and items."""

    location: LocationResponse
    user: UserResponse
    items: list[ItemResponse] = Field(default_factory=list)
    total_items: int = 0
    total_quantity: int = 0


class UserSessionsResponse(BaseModel):
    user_id: int
    sessions: list[SessionDetailResponse]
    total: int


class ComponentHealthResponse(BaseModel):
    """Health of one backing component."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ComponentHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. SESSION_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
