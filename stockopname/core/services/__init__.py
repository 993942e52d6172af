"""
Core business logic services.

Layer-pure services that depend only on:
- stockopname/core/entities/*
- stockopname/core/interfaces/*
- stockopname/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from stockopname.core.services.account_service import AccountService
from stockopname.core.services.item_ledger import ItemLedgerService, ItemSequence
from stockopname.core.services.location_catalog import LocationCatalogService
from stockopname.core.services.report_renderer import (
    IReportRenderer,
    NarrativeReportRenderer,
    TabularReportRenderer,
    escape_csv_field,
    format_timestamp,
    render_narrative_report,
    render_tabular_report,
)
from stockopname.core.services.session_lifecycle import SessionLifecycleService

__all__ = [
    # Session lifecycle
    "SessionLifecycleService",
    # Item ledger
    "ItemLedgerService",
    "ItemSequence",
    # Locations
    "LocationCatalogService",
    # Accounts
    "AccountService",
    # Reports
    "IReportRenderer",
    "TabularReportRenderer",
    "NarrativeReportRenderer",
    "render_tabular_report",
    "render_narrative_report",
    "format_timestamp",
    "escape_csv_field",
]
