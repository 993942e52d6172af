"""
Generate Report Use Case.

Renders a point-in-time snapshot of a session as tabular (CSV) or narrative
(plain text) report.
"""

from dataclasses import dataclass

from stockopname.config import get_logger
from stockopname.core.clock import IClock, get_clock
from stockopname.core.services import (
    IReportRenderer,
    NarrativeReportRenderer,
    SessionLifecycleService,
    TabularReportRenderer,
)

logger = get_logger(__name__)


@dataclass
class ReportResult:
    """Rendered report text and download metadata."""

    content: str
    session_id: int
    filename: str
    media_type: str
    size_bytes: int


class GenerateReportUseCase:
    """
    Use case for session report generation.

    Flow:
    1. Load the session with location, user and items
    2. Render through the configured renderer
    3. Return text plus metadata
    """

    def __init__(
        self,
        renderer: IReportRenderer,
        lifecycle_service: SessionLifecycleService | None = None,
        clock: IClock | None = None,
    ):
        self._renderer = renderer
        self._lifecycle_service = lifecycle_service
        self._clock = clock or get_clock()

    async def _get_lifecycle_service(self) -> SessionLifecycleService:
        if self._lifecycle_service is None:
            from stockopname.application.services import get_session_lifecycle_service

            self._lifecycle_service = await get_session_lifecycle_service()
        return self._lifecycle_service

    async def execute(self, session_id: int) -> ReportResult:
        """
        Render the report for a session.

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        logger.info("generate_report_started", session_id=session_id, kind=self._renderer.name)

        service = await self._get_lifecycle_service()
        session = await service.get_session_with_relations(session_id)

        content = self._renderer.render(session, self._clock.now())
        size = len(content.encode("utf-8"))

        logger.info(
            "generate_report_complete",
            session_id=session_id,
            kind=self._renderer.name,
            items=session.total_items,
            size_bytes=size,
        )
        return ReportResult(
            content=content,
            session_id=session_id,
            filename=f"stock_opname_session_{session_id}.{self._renderer.extension}",
            media_type=self._renderer.media_type,
            size_bytes=size,
        )


class GenerateTabularReportUseCase(GenerateReportUseCase):
    """Spreadsheet export of a session."""

    def __init__(
        self,
        lifecycle_service: SessionLifecycleService | None = None,
        clock: IClock | None = None,
    ):
        super().__init__(TabularReportRenderer(), lifecycle_service, clock)


class GenerateNarrativeReportUseCase(GenerateReportUseCase):
    """Printable text report of a session."""

    def __init__(
        self,
        lifecycle_service: SessionLifecycleService | None = None,
        clock: IClock | None = None,
    ):
        super().__init__(NarrativeReportRenderer(), lifecycle_service, clock)
