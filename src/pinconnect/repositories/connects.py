"""Connect persistence.

Learn: pins_id_2 is a text[] column; member ids are stored as strings in
the order the caller gave them. Deletion is physical; there is no
deleted_at on this table.
"""

import uuid
from typing import Optional, Protocol, Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from pinconnect.db.models import Connect
from pinconnect.repositories.base import storage_guard
from pinconnect.schemas.connect import ConnectRead


class ConnectRepository(Protocol):
    async def create(
        self,
        owner_id: uuid.UUID,
        name: str,
        pin_1: uuid.UUID,
        pin_2: Sequence[uuid.UUID],
        show: bool,
    ) -> ConnectRead: ...

    async def find_by_id(self, connect_id: uuid.UUID) -> Optional[ConnectRead]: ...

    async def find_by_owner(self, owner_id: uuid.UUID) -> list[ConnectRead]: ...

    async def update(
        self,
        connect_id: uuid.UUID,
        name: str,
        pin_1: uuid.UUID,
        pin_2: Sequence[uuid.UUID],
        show: bool,
    ) -> Optional[ConnectRead]: ...

    async def delete(self, connect_id: uuid.UUID) -> bool: ...


class SQLConnectRepository:
    """ConnectRepository backed by the connect table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self,
        owner_id: uuid.UUID,
        name: str,
        pin_1: uuid.UUID,
        pin_2: Sequence[uuid.UUID],
        show: bool,
    ) -> ConnectRead:
        connect = Connect(
            user_id=owner_id,
            name=name,
            pin_1=pin_1,
            pin_2=[str(p) for p in pin_2],
            show=show,
        )
        async with storage_guard(self.db, "create", "connect"):
            self.db.add(connect)
            await self.db.commit()
        return ConnectRead.model_validate(connect)

    async def find_by_id(self, connect_id: uuid.UUID) -> Optional[ConnectRead]:
        async with storage_guard(self.db, "find", "connect"):
            connect = await self.db.get(Connect, connect_id)
        return ConnectRead.model_validate(connect) if connect else None

    async def find_by_owner(self, owner_id: uuid.UUID) -> list[ConnectRead]:
        q = select(Connect).where(Connect.user_id == owner_id).order_by(Connect.id)
        async with storage_guard(self.db, "list", "connects"):
            result = await self.db.execute(q)
            connects = result.scalars().all()
        return [ConnectRead.model_validate(c) for c in connects]

    async def update(
        self,
        connect_id: uuid.UUID,
        name: str,
        pin_1: uuid.UUID,
        pin_2: Sequence[uuid.UUID],
        show: bool,
    ) -> Optional[ConnectRead]:
        async with storage_guard(self.db, "update", "connect"):
            connect = await self.db.get(Connect, connect_id)
            if connect is None:
                return None
            connect.name = name
            connect.pin_1 = pin_1
            connect.pin_2 = [str(p) for p in pin_2]
            connect.show = show
            await self.db.commit()
        return ConnectRead.model_validate(connect)

    async def delete(self, connect_id: uuid.UUID) -> bool:
        stmt = delete(Connect).where(Connect.id == connect_id)
        async with storage_guard(self.db, "delete", "connect"):
            result = await self.db.execute(stmt)
            await self.db.commit()
        return result.rowcount > 0
