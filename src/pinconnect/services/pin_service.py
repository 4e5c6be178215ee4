"""Pin service — ownership-scoped CRUD over map markers.

Learn: Reads are public (any authenticated caller can get any live pin),
mutations are owner-only. The order of checks matters:
1. Validate input (no storage access on bad coordinates)
2. Load the live pin → NotFoundError if missing or soft-deleted
3. Compare owner → ForbiddenError if the caller isn't the owner
4. Write

Deleting is soft: deleted_at is set and the pin disappears from every
query. A second delete is a NotFoundError, not a silent success.
"""

import math
import uuid

import structlog

from pinconnect.errors import (
    ForbiddenError,
    InvalidCoordinatesError,
    NotFoundError,
    ValidationError,
)
from pinconnect.repositories.pins import PinRepository
from pinconnect.schemas.pin import PinRead

logger = structlog.get_logger()


def is_valid_coordinate(latitude: float, longitude: float) -> bool:
    """True iff -90 <= lat <= 90 and -180 <= lng <= 180 (NaN is never valid)."""
    if math.isnan(latitude) or math.isnan(longitude):
        return False
    return -90 <= latitude <= 90 and -180 <= longitude <= 180


def _validate(name: str, latitude: float, longitude: float) -> str:
    if not is_valid_coordinate(latitude, longitude):
        raise InvalidCoordinatesError()
    name = (name or "").strip()
    if not name:
        raise ValidationError("name is required")
    return name


class PinService:
    """Business logic for pins."""

    def __init__(self, pins: PinRepository):
        self.pins = pins

    async def create(
        self, owner_id: uuid.UUID, name: str, latitude: float, longitude: float
    ) -> PinRead:
        name = _validate(name, latitude, longitude)
        pin = await self.pins.create(owner_id, name, latitude, longitude)
        logger.info("pin.created", pin_id=str(pin.id), user_id=str(owner_id))
        return pin

    async def get(self, pin_id: uuid.UUID) -> PinRead:
        pin = await self.pins.find_by_id(pin_id)
        if pin is None:
            raise NotFoundError("pin not found")
        return pin

    async def list_by_owner(self, owner_id: uuid.UUID) -> list[PinRead]:
        return list(await self.pins.find_by_owner(owner_id))

    async def update(
        self,
        pin_id: uuid.UUID,
        caller_id: uuid.UUID,
        name: str,
        latitude: float,
        longitude: float,
    ) -> PinRead:
        name = _validate(name, latitude, longitude)
        await self._owned(pin_id, caller_id)

        pin = await self.pins.update(pin_id, name, latitude, longitude)
        if pin is None:
            # soft-deleted between the ownership check and the write
            raise NotFoundError("pin not found")
        logger.info("pin.updated", pin_id=str(pin_id))
        return pin

    async def soft_delete(self, pin_id: uuid.UUID, caller_id: uuid.UUID) -> None:
        await self._owned(pin_id, caller_id)
        if not await self.pins.soft_delete(pin_id):
            raise NotFoundError("pin not found")
        logger.info("pin.deleted", pin_id=str(pin_id))

    async def _owned(self, pin_id: uuid.UUID, caller_id: uuid.UUID) -> PinRead:
        pin = await self.get(pin_id)
        if pin.user_id != caller_id:
            logger.warning(
                "pin.forbidden", pin_id=str(pin_id), caller_id=str(caller_id)
            )
            raise ForbiddenError()
        return pin
