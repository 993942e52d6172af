"""Location catalog endpoints."""

from fastapi import APIRouter, Depends, status

from stockopname.api.dependencies import (
    get_create_location_use_case,
    get_list_locations_use_case,
    get_update_location_use_case,
)
from stockopname.application.dto.requests import CreateLocationRequest, UpdateLocationRequest
from stockopname.application.dto.responses import (
    ErrorResponse,
    LocationListResponse,
    LocationResponse,
)
from stockopname.application.use_cases import (
    CreateLocationUseCase,
    ListLocationsUseCase,
    UpdateLocationUseCase,
)

router = APIRouter(prefix="/api/locations", tags=["locations"])


@router.get("", response_model=LocationListResponse)
async def list_locations(
    use_case: ListLocationsUseCase = Depends(get_list_locations_use_case),
) -> LocationListResponse:
    """All locations ordered by name."""
    locations = await use_case.execute()
    return use_case.to_response(locations)


@router.post(
    "",
    response_model=LocationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_location(
    request: CreateLocationRequest,
    use_case: CreateLocationUseCase = Depends(get_create_location_use_case),
) -> LocationResponse:
    location = await use_case.execute(request)
    return use_case.to_response(location)


@router.patch(
    "/{location_id}",
    response_model=LocationResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_location(
    location_id: int,
    request: UpdateLocationRequest,
    use_case: UpdateLocationUseCase = Depends(get_update_location_use_case),
) -> LocationResponse:
    """Change name and/or description. The code is immutable."""
    location = await use_case.execute(location_id, request)
    return use_case.to_response(location)
