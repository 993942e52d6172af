"""Tests for the report generation use cases."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from stockopname.application.use_cases import (
    GenerateNarrativeReportUseCase,
    GenerateReportUseCase,
    GenerateTabularReportUseCase,
    ReportResult,
)
from stockopname.core.exceptions import SessionNotFoundError
from stockopname.core.services import IReportRenderer, SessionLifecycleService


@pytest.fixture
def mock_lifecycle(hydrated_session) -> AsyncMock:
    """Lifecycle service returning the WH-A session."""
    service = AsyncMock(spec=SessionLifecycleService)
    service.get_session_with_relations.return_value = hydrated_session
    return service


class TestGenerateReportUseCase:
    async def test_uses_renderer_and_clock(self, mock_lifecycle, clock, hydrated_session):
        renderer = MagicMock(spec=IReportRenderer)
        renderer.name = "fake"
        renderer.extension = "dat"
        renderer.media_type = "application/octet-stream"
        renderer.render.return_value = "héllo"

        use_case = GenerateReportUseCase(renderer, lifecycle_service=mock_lifecycle, clock=clock)
        result = await use_case.execute(10)

        assert isinstance(result, ReportResult)
        assert result.content == "héllo"
        assert result.size_bytes == 6
        assert result.filename == "stock_opname_session_10.dat"
        renderer.render.assert_called_once_with(hydrated_session, clock.now())

    async def test_session_not_found(self, clock):
        service = AsyncMock(spec=SessionLifecycleService)
        service.get_session_with_relations.side_effect = SessionNotFoundError(999)

        use_case = GenerateTabularReportUseCase(lifecycle_service=service, clock=clock)

        with pytest.raises(SessionNotFoundError):
            await use_case.execute(999)


class TestTabularReportUseCase:
    async def test_csv_result(self, mock_lifecycle, clock):
        result = await GenerateTabularReportUseCase(mock_lifecycle, clock).execute(10)

        assert result.filename == "stock_opname_session_10.csv"
        assert result.media_type.startswith("text/csv")
        assert result.content.startswith("\ufeffSKU,Lot Number")
        assert result.content.count("\n") == 2


class TestNarrativeReportUseCase:
    async def test_text_result(self, mock_lifecycle, clock):
        clock.advance(hours=3)
        result = await GenerateNarrativeReportUseCase(mock_lifecycle, clock).execute(10)

        assert result.filename == "stock_opname_session_10.txt"
        assert result.media_type.startswith("text/plain")
        assert "Report Generated: 2024-01-15 12:30:00" in result.content
        assert result.size_bytes == len(result.content.encode("utf-8"))
