"""Pin persistence on PostGIS.

Learn: The location column is geometry(Point, 4326). PostGIS points are
(x, y) = (longitude, latitude), so writes go through
ST_SetSRID(ST_MakePoint(lng, lat), 4326) and reads pull the two floats
back out with ST_Y (latitude) and ST_X (longitude). Every query filters
on deleted_at IS NULL. A soft-deleted pin does not exist as far as
callers are concerned.
"""

import uuid
from typing import Optional, Protocol

from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pinconnect.db.models import SRID_WGS84, Pin
from pinconnect.repositories.base import storage_guard
from pinconnect.schemas.pin import PinRead


class PinRepository(Protocol):
    async def create(
        self, owner_id: uuid.UUID, name: str, latitude: float, longitude: float
    ) -> PinRead: ...

    async def find_by_id(self, pin_id: uuid.UUID) -> Optional[PinRead]: ...

    async def find_by_owner(self, owner_id: uuid.UUID) -> list[PinRead]: ...

    async def update(
        self, pin_id: uuid.UUID, name: str, latitude: float, longitude: float
    ) -> Optional[PinRead]: ...

    async def soft_delete(self, pin_id: uuid.UUID) -> bool: ...


def _point(latitude: float, longitude: float):
    return func.ST_SetSRID(func.ST_MakePoint(longitude, latitude), SRID_WGS84)


_PIN_COLUMNS = (
    Pin.id,
    Pin.name,
    Pin.user_id,
    func.ST_Y(Pin.location).label("latitude"),
    func.ST_X(Pin.location).label("longitude"),
    Pin.created_at,
    Pin.edited_at.label("edited_at"),
    Pin.deleted_at,
)


def _to_pin(row) -> PinRead:
    return PinRead.model_validate(dict(row._mapping))


class SQLPinRepository:
    """PinRepository backed by the pins table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self, owner_id: uuid.UUID, name: str, latitude: float, longitude: float
    ) -> PinRead:
        stmt = (
            insert(Pin)
            .values(
                id=uuid.uuid4(),
                name=name,
                user_id=owner_id,
                location=_point(latitude, longitude),
            )
            .returning(*_PIN_COLUMNS)
        )
        async with storage_guard(self.db, "create", "pin"):
            row = (await self.db.execute(stmt)).one()
            await self.db.commit()
        return _to_pin(row)

    async def find_by_id(self, pin_id: uuid.UUID) -> Optional[PinRead]:
        q = select(*_PIN_COLUMNS).where(Pin.id == pin_id, Pin.deleted_at.is_(None))
        async with storage_guard(self.db, "find", "pin"):
            row = (await self.db.execute(q)).first()
        return _to_pin(row) if row else None

    async def find_by_owner(self, owner_id: uuid.UUID) -> list[PinRead]:
        q = (
            select(*_PIN_COLUMNS)
            .where(Pin.user_id == owner_id, Pin.deleted_at.is_(None))
            .order_by(Pin.created_at.desc(), Pin.id)
        )
        async with storage_guard(self.db, "list", "pins"):
            rows = (await self.db.execute(q)).all()
        return [_to_pin(r) for r in rows]

    async def update(
        self, pin_id: uuid.UUID, name: str, latitude: float, longitude: float
    ) -> Optional[PinRead]:
        stmt = (
            update(Pin)
            .where(Pin.id == pin_id, Pin.deleted_at.is_(None))
            .values(
                name=name,
                location=_point(latitude, longitude),
                edited_at=func.now(),
            )
            .returning(*_PIN_COLUMNS)
            .execution_options(synchronize_session=False)
        )
        async with storage_guard(self.db, "update", "pin"):
            row = (await self.db.execute(stmt)).first()
            await self.db.commit()
        return _to_pin(row) if row else None

    async def soft_delete(self, pin_id: uuid.UUID) -> bool:
        stmt = (
            update(Pin)
            .where(Pin.id == pin_id, Pin.deleted_at.is_(None))
            .values(deleted_at=func.now())
            .execution_options(synchronize_session=False)
        )
        async with storage_guard(self.db, "delete", "pin"):
            result = await self.db.execute(stmt)
            await self.db.commit()
        return result.rowcount > 0
