"""Location catalog service."""

from stockopname.config import get_logger
from stockopname.core.clock import IClock, get_clock
from stockopname.core.entities import Location, LocationPatch, provided_fields
from stockopname.core.exceptions import LocationNotFoundError, ValidationError
from stockopname.core.interfaces import ILocationStore

logger = get_logger(__name__)


class LocationCatalogService:
    """
    Administrative management of counting locations.

    Location codes are unique and immutable; only name and description can
    change after creation.
    """

    def __init__(self, location_store: ILocationStore, clock: IClock | None = None):
        self._locations = location_store
        self._clock = clock or get_clock()

    async def create_location(
        self,
        name: str,
        code: str,
        description: str | None = None,
    ) -> Location:
        """
        Create a location.

        Raises:
            ValidationError: If name or code is blank
            ConstraintViolationError: If the code is already taken
        """
        _require_text("name", name)
        _require_text("code", code)

        now = self._clock.now()
        location = await self._locations.create_location(
            Location(
                name=name,
                code=code,
                description=description,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("location_created", location_id=location.id, code=code)
        return location

    async def get_location(self, location_id: int) -> Location:
        location = await self._locations.get_location(location_id)
        if location is None:
            raise LocationNotFoundError(location_id)
        return location

    async def list_locations(self) -> list[Location]:
        """All locations ordered by name."""
        return await self._locations.list_locations()

    async def update_location(self, location_id: int, patch: LocationPatch) -> Location:
        """
        Change a location's name and/or description.

        Raises:
            LocationNotFoundError: If the location does not exist
            ValidationError: If the new name is blank
        """
        changes = provided_fields(patch)
        if "name" in changes:
            _require_text("name", changes["name"])

        location = await self.get_location(location_id)
        updated = location.model_copy(update={**changes, "updated_at": self._clock.now()})
        updated = await self._locations.update_location(updated)

        logger.info("location_updated", location_id=location_id, fields=sorted(changes))
        return updated


def _require_text(field: str, value: object) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, "must be a non-empty string", value)
