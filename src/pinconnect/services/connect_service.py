"""Connect service — anchor + member pin shapes.

Learn: Connect rows hold pin ids but the store has no foreign keys to
pins. Referential checks happen here, through PinService.get(), so a
soft-deleted pin counts as missing exactly like it does everywhere else.

A connect needs a non-blank name on create. Reference validation runs
before any write: anchor first, then each member in order, stopping at
the first miss. The check-then-insert pair is not one transaction: a
pin deleted in between slips through, and that is accepted.

On update only the reference fields the caller supplied are checked.
An untouched anchor is not re-validated.
"""

import uuid
from typing import Optional, Sequence

import structlog

from pinconnect.errors import (
    ForbiddenError,
    InvalidReferencesError,
    NotFoundError,
    PinNotFoundError,
    ValidationError,
)
from pinconnect.repositories.connects import ConnectRepository
from pinconnect.schemas.connect import ConnectRead
from pinconnect.services.pin_service import PinService

logger = structlog.get_logger()


class ConnectService:
    """Business logic for connects."""

    def __init__(self, connects: ConnectRepository, pins: PinService):
        self.connects = connects
        self.pins = pins

    async def create(
        self,
        owner_id: uuid.UUID,
        name: str,
        pin_1: Optional[uuid.UUID],
        pin_2: Sequence[uuid.UUID],
        show: bool,
    ) -> ConnectRead:
        name = (name or "").strip()
        if not name:
            raise ValidationError("name is required")
        if not pin_1 or not pin_2:
            raise InvalidReferencesError()
        await self._require_pins([pin_1, *pin_2])

        connect = await self.connects.create(
            owner_id, name, pin_1, list(pin_2), show
        )
        logger.info(
            "connect.created",
            connect_id=str(connect.id),
            user_id=str(owner_id),
            members=len(connect.pin_2),
        )
        return connect

    async def update(
        self,
        connect_id: uuid.UUID,
        caller_id: uuid.UUID,
        name: Optional[str] = None,
        pin_1: Optional[uuid.UUID] = None,
        pin_2: Optional[Sequence[uuid.UUID]] = None,
        *,
        show: bool,
    ) -> ConnectRead:
        """Replace supplied fields; show is always overwritten."""
        current = await self._owned(connect_id, caller_id)

        if pin_1:
            await self._require_pins([pin_1])
        if pin_2:
            await self._require_pins(pin_2)

        updated = await self.connects.update(
            connect_id,
            name if name else current.name,
            pin_1 if pin_1 else current.pin_1,
            list(pin_2) if pin_2 else current.pin_2,
            show,
        )
        if updated is None:
            raise NotFoundError("connect not found")
        logger.info("connect.updated", connect_id=str(connect_id))
        return updated

    async def list_by_owner(self, owner_id: uuid.UUID) -> list[ConnectRead]:
        return list(await self.connects.find_by_owner(owner_id))

    async def delete(self, connect_id: uuid.UUID, caller_id: uuid.UUID) -> None:
        await self._owned(connect_id, caller_id)
        if not await self.connects.delete(connect_id):
            raise NotFoundError("connect not found")
        logger.info("connect.deleted", connect_id=str(connect_id))

    # ─── Helpers ────────────────────────────────────────

    async def _owned(self, connect_id: uuid.UUID, caller_id: uuid.UUID) -> ConnectRead:
        connect = await self.connects.find_by_id(connect_id)
        if connect is None:
            raise NotFoundError("connect not found")
        if connect.user_id != caller_id:
            logger.warning(
                "connect.forbidden",
                connect_id=str(connect_id),
                caller_id=str(caller_id),
            )
            raise ForbiddenError()
        return connect

    async def _require_pins(self, pin_ids: Sequence[uuid.UUID]) -> None:
        for pin_id in pin_ids:
            try:
                await self.pins.get(pin_id)
            except NotFoundError:
                raise PinNotFoundError(pin_id)
