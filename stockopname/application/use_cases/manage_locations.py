"""
Location use cases: create, list, update.
"""

from stockopname.application.dto.requests import CreateLocationRequest, UpdateLocationRequest
from stockopname.application.dto.responses import LocationListResponse, LocationResponse
from stockopname.core.entities import Location
from stockopname.core.services import LocationCatalogService


class _LocationUseCase:
    def __init__(self, catalog_service: LocationCatalogService | None = None):
        self._catalog_service = catalog_service

    async def _get_catalog_service(self) -> LocationCatalogService:
        if self._catalog_service is None:
            from stockopname.application.services import get_location_catalog_service

            self._catalog_service = await get_location_catalog_service()
        return self._catalog_service


class CreateLocationUseCase(_LocationUseCase):
    async def execute(self, request: CreateLocationRequest) -> Location:
        service = await self._get_catalog_service()
        return await service.create_location(
            name=request.name,
            code=request.code,
            description=request.description,
        )

    @staticmethod
    def to_response(location: Location) -> LocationResponse:
        return LocationResponse.model_validate(location)


class ListLocationsUseCase(_LocationUseCase):
    """All locations ordered by name."""

    async def execute(self) -> list[Location]:
        service = await self._get_catalog_service()
        return await service.list_locations()

    @staticmethod
    def to_response(locations: list[Location]) -> LocationListResponse:
        return LocationListResponse(
            locations=[LocationResponse.model_validate(loc) for loc in locations],
            total=len(locations),
        )


class UpdateLocationUseCase(_LocationUseCase):
    """Rename a location or change its description; the code never changes."""

    async def execute(self, location_id: int, request: UpdateLocationRequest) -> Location:
        service = await self._get_catalog_service()
        return await service.update_location(location_id, request.to_patch())

    @staticmethod
    def to_response(location: Location) -> LocationResponse:
        return LocationResponse.model_validate(location)
