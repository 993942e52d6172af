"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.
"""

from stockopname.application.dto.requests import (
    AppendItemRequest,
    CreateLocationRequest,
    CreateUserRequest,
    LoginRequest,
    OpenSessionRequest,
    UpdateLocationRequest,
    UpdateSessionRequest,
)
from stockopname.application.dto.responses import (
    ComponentHealthResponse,
    ErrorResponse,
    HealthResponse,
    ItemListResponse,
    ItemResponse,
    LocationListResponse,
    LocationResponse,
    SessionDetailResponse,
    SessionResponse,
    UserResponse,
    UserSessionsResponse,
)

__all__ = [
    # Requests
    "LoginRequest",
    "CreateUserRequest",
    "CreateLocationRequest",
    "UpdateLocationRequest",
    "OpenSessionRequest",
    "UpdateSessionRequest",
    "AppendItemRequest",
    # Responses
    "UserResponse",
    "LocationResponse",
    "LocationListResponse",
    "ItemResponse",
    "ItemListResponse",
    "SessionResponse",
    "SessionDetailResponse",
    "UserSessionsResponse",
    "ComponentHealthResponse",
    "HealthResponse",
    "ErrorResponse",
]
