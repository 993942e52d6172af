"""
Service factory functions for dependency injection.

Wires the SQLite stores, the bcrypt hasher and settings into the core
services. Use cases and API dependencies import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from typing import TYPE_CHECKING

from stockopname.config import get_settings
from stockopname.core.clock import IClock, get_clock
from stockopname.core.services import (
    AccountService,
    ItemLedgerService,
    LocationCatalogService,
    SessionLifecycleService,
)

if TYPE_CHECKING:
    from stockopname.core.interfaces import (
        IItemStore,
        ILocationStore,
        IPasswordHasher,
        ISessionStore,
        IUserStore,
    )


# Singleton service instances
_session_lifecycle_service: SessionLifecycleService | None = None
_item_ledger_service: ItemLedgerService | None = None
_location_catalog_service: LocationCatalogService | None = None
_account_service: AccountService | None = None


async def get_session_lifecycle_service(
    session_store: "ISessionStore | None" = None,
    item_store: "IItemStore | None" = None,
    location_store: "ILocationStore | None" = None,
    user_store: "IUserStore | None" = None,
    clock: IClock | None = None,
) -> SessionLifecycleService:
    """
    Get or create SessionLifecycleService.

    The shared instance is only used when no override is given.
    """
    global _session_lifecycle_service

    overridden = any(x is not None for x in (session_store, item_store, location_store, user_store, clock))
    if _session_lifecycle_service is not None and not overridden:
        return _session_lifecycle_service

    # Lazy import infrastructure to avoid circular imports
    from stockopname.infrastructure.storage.sqlite import (
        get_item_store,
        get_location_store,
        get_session_store,
        get_user_store,
    )

    service = SessionLifecycleService(
        session_store=session_store or await get_session_store(),
        item_store=item_store or await get_item_store(),
        location_store=location_store or await get_location_store(),
        user_store=user_store or await get_user_store(),
        clock=clock or get_clock(),
        stamp_on_cancel=get_settings().lifecycle.stamp_on_cancel,
    )

    if not overridden:
        _session_lifecycle_service = service
    return service


async def get_item_ledger_service(
    item_store: "IItemStore | None" = None,
    session_store: "ISessionStore | None" = None,
    clock: IClock | None = None,
) -> ItemLedgerService:
    """Get or create ItemLedgerService."""
    global _item_ledger_service

    overridden = any(x is not None for x in (item_store, session_store, clock))
    if _item_ledger_service is not None and not overridden:
        return _item_ledger_service

    from stockopname.infrastructure.storage.sqlite import get_item_store, get_session_store

    service = ItemLedgerService(
        item_store=item_store or await get_item_store(),
        session_store=session_store or await get_session_store(),
        clock=clock or get_clock(),
    )

    if not overridden:
        _item_ledger_service = service
    return service


async def get_location_catalog_service(
    location_store: "ILocationStore | None" = None,
    clock: IClock | None = None,
) -> LocationCatalogService:
    """Get or create LocationCatalogService."""
    global _location_catalog_service

    overridden = location_store is not None or clock is not None
    if _location_catalog_service is not None and not overridden:
        return _location_catalog_service

    from stockopname.infrastructure.storage.sqlite import get_location_store

    service = LocationCatalogService(
        location_store=location_store or await get_location_store(),
        clock=clock or get_clock(),
    )

    if not overridden:
        _location_catalog_service = service
    return service


async def get_account_service(
    user_store: "IUserStore | None" = None,
    hasher: "IPasswordHasher | None" = None,
    clock: IClock | None = None,
) -> AccountService:
    """Get or create AccountService with the configured bcrypt cost."""
    global _account_service

    overridden = any(x is not None for x in (user_store, hasher, clock))
    if _account_service is not None and not overridden:
        return _account_service

    from stockopname.infrastructure.security import get_password_hasher
    from stockopname.infrastructure.storage.sqlite import get_user_store

    service = AccountService(
        user_store=user_store or await get_user_store(),
        hasher=hasher or get_password_hasher(),
        clock=clock or get_clock(),
        min_password_length=get_settings().auth.min_password_length,
    )

    if not overridden:
        _account_service = service
    return service


def reset_services() -> None:
    """Drop cached service instances (for testing)."""
    global _session_lifecycle_service, _item_ledger_service
    global _location_catalog_service, _account_service
    _session_lifecycle_service = None
    _item_ledger_service = None
    _location_catalog_service = None
    _account_service = None
