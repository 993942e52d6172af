"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
Shape is checked here; business rules (blank names, negative quantities,
password length) are enforced by the core services.
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, StrictInt

from stockopname.core.entities import UNSET, LocationPatch, SessionPatch, SessionStatus


class LoginRequest(BaseModel):
    """Credentials for the login endpoint."""

    username: str = Field(..., examples=["alice"])
    password: str = Field(..., examples=["secret123"])


class CreateUserRequest(BaseModel):
    """Register a new user."""

    username: str = Field(..., examples=["alice"])
    email: EmailStr = Field(..., examples=["alice@example.com"])
    full_name: str = Field(..., examples=["Alice Example"])
    password: str = Field(..., description="At least 6 characters")


class CreateLocationRequest(BaseModel):
    """Register a counting location."""

    name: str = Field(..., examples=["Warehouse A"])
    code: str = Field(..., description="Unique, immutable code", examples=["WH-A"])
    description: str | None = Field(default=None, examples=["Main warehouse"])


class UpdateLocationRequest(BaseModel):
    """Partial update of a location.

    Omitted fields are left alone; ``description: null`` clears it.
    """

    name: str | None = None
    description: str | None = None

    def to_patch(self) -> LocationPatch:
        fields = self.model_fields_set
        return LocationPatch(
            name=self.name if "name" in fields else UNSET,
            description=self.description if "description" in fields else UNSET,
        )


class OpenSessionRequest(BaseModel):
    """Open a new stock opname session."""

    location_id: int = Field(..., examples=[1])
    user_id: int = Field(..., examples=[1])
    session_name: str = Field(..., examples=["Monthly count January"])


class UpdateSessionRequest(BaseModel):
    """Partial update of a session.

    Omitted fields are left alone; an explicit ``null`` clears the field.
    """

    status: SessionStatus | None = Field(default=None, examples=["completed"])
    signature_data: str | None = Field(
        default=None,
        description="Encoded signature image, usually a base64 data URL",
    )
    completed_at: datetime | None = None

    def to_patch(self) -> SessionPatch:
        fields = self.model_fields_set
        return SessionPatch(
            status=self.status if "status" in fields else UNSET,
            signature_data=self.signature_data if "signature_data" in fields else UNSET,
            completed_at=self.completed_at if "completed_at" in fields else UNSET,
        )


class AppendItemRequest(BaseModel):
    """Record one counted item."""

    sku: str = Field(..., examples=["SKU001"])
    lot_number: str = Field(..., examples=["LOT001"])
    quantity: StrictInt = Field(..., description="Zero or greater", examples=[10])
    barcode_data: str = Field(..., examples=["8991234567890"])
