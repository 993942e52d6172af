"""
Dependency injection container for FastAPI.

Provides use case instances to route handlers. Tests replace any of these
through ``app.dependency_overrides``.
"""

from functools import lru_cache

from stockopname.application.use_cases import (
    AppendItemUseCase,
    CreateLocationUseCase,
    CreateUserUseCase,
    GenerateNarrativeReportUseCase,
    GenerateTabularReportUseCase,
    GetSessionUseCase,
    ListLocationsUseCase,
    ListSessionItemsUseCase,
    ListUserSessionsUseCase,
    LoginUseCase,
    OpenSessionUseCase,
    UpdateLocationUseCase,
    UpdateSessionUseCase,
)
from stockopname.config import Settings, get_settings
from stockopname.infrastructure.storage.sqlite import ConnectionPool, get_pool


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


async def get_db_pool() -> ConnectionPool:
    """Get the shared SQLite connection pool."""
    return await get_pool()


# Account use cases
def get_login_use_case() -> LoginUseCase:
    return LoginUseCase()


def get_create_user_use_case() -> CreateUserUseCase:
    return CreateUserUseCase()


# Location use cases
def get_create_location_use_case() -> CreateLocationUseCase:
    return CreateLocationUseCase()


def get_list_locations_use_case() -> ListLocationsUseCase:
    return ListLocationsUseCase()


def get_update_location_use_case() -> UpdateLocationUseCase:
    return UpdateLocationUseCase()


# Session use cases
def get_open_session_use_case() -> OpenSessionUseCase:
    return OpenSessionUseCase()


def get_update_session_use_case() -> UpdateSessionUseCase:
    return UpdateSessionUseCase()


def get_session_detail_use_case() -> GetSessionUseCase:
    return GetSessionUseCase()


def get_list_user_sessions_use_case() -> ListUserSessionsUseCase:
    return ListUserSessionsUseCase()


# Item use cases
def get_append_item_use_case() -> AppendItemUseCase:
    return AppendItemUseCase()


def get_list_session_items_use_case() -> ListSessionItemsUseCase:
    return ListSessionItemsUseCase()


# Report use cases
def get_tabular_report_use_case() -> GenerateTabularReportUseCase:
    return GenerateTabularReportUseCase()


def get_narrative_report_use_case() -> GenerateNarrativeReportUseCase:
    return GenerateNarrativeReportUseCase()
