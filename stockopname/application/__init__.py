"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services
3. Providing factory functions for dependency injection

Use cases are the only entry point for API handlers.
"""

from stockopname.application.services import (
    get_account_service,
    get_item_ledger_service,
    get_location_catalog_service,
    get_session_lifecycle_service,
    reset_services,
)

__all__ = [
    "get_session_lifecycle_service",
    "get_item_ledger_service",
    "get_location_catalog_service",
    "get_account_service",
    "reset_services",
]
