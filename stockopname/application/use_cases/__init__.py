"""Application use cases."""

from stockopname.application.use_cases.generate_report import (
    GenerateNarrativeReportUseCase,
    GenerateReportUseCase,
    GenerateTabularReportUseCase,
    ReportResult,
)
from stockopname.application.use_cases.manage_accounts import CreateUserUseCase, LoginUseCase
from stockopname.application.use_cases.manage_locations import (
    CreateLocationUseCase,
    ListLocationsUseCase,
    UpdateLocationUseCase,
)
from stockopname.application.use_cases.manage_sessions import (
    GetSessionUseCase,
    ListUserSessionsUseCase,
    OpenSessionUseCase,
    UpdateSessionUseCase,
)
from stockopname.application.use_cases.record_items import (
    AppendItemUseCase,
    ListSessionItemsUseCase,
)

__all__ = [
    "OpenSessionUseCase",
    "UpdateSessionUseCase",
    "GetSessionUseCase",
    "ListUserSessionsUseCase",
    "AppendItemUseCase",
    "ListSessionItemsUseCase",
    "GenerateReportUseCase",
    "GenerateTabularReportUseCase",
    "GenerateNarrativeReportUseCase",
    "ReportResult",
    "CreateUserUseCase",
    "LoginUseCase",
    "CreateLocationUseCase",
    "ListLocationsUseCase",
    "UpdateLocationUseCase",
]
