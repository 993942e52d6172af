"""Session report download endpoints."""

from fastapi import APIRouter, Depends
from starlette.responses import Response

from stockopname.api.dependencies import (
    get_narrative_report_use_case,
    get_tabular_report_use_case,
)
from stockopname.application.dto.responses import ErrorResponse
from stockopname.application.use_cases import (
    GenerateNarrativeReportUseCase,
    GenerateTabularReportUseCase,
    ReportResult,
)

router = APIRouter(prefix="/api/sessions/{session_id}/reports", tags=["reports"])

_REPORT_RESPONSES: dict[int | str, dict] = {404: {"model": ErrorResponse}}


def _attachment(result: ReportResult) -> Response:
    return Response(
        content=result.content.encode("utf-8"),
        media_type=result.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{result.filename}"',
            "X-Report-Session-ID": str(result.session_id),
        },
    )


@router.get("/tabular", response_class=Response, responses=_REPORT_RESPONSES)
async def tabular_report(
    session_id: int,
    use_case: GenerateTabularReportUseCase = Depends(get_tabular_report_use_case),
) -> Response:
    """Download the session as BOM-prefixed CSV."""
    return _attachment(await use_case.execute(session_id))


@router.get("/narrative", response_class=Response, responses=_REPORT_RESPONSES)
async def narrative_report(
    session_id: int,
    use_case: GenerateNarrativeReportUseCase = Depends(get_narrative_report_use_case),
) -> Response:
    """Download the printable text report."""
    return _attachment(await use_case.execute(session_id))
