"""User persistence."""

import uuid
from typing import Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pinconnect.db.models import User
from pinconnect.errors import EmailTakenError
from pinconnect.repositories.base import storage_guard
from pinconnect.schemas.user import UserRecord


class UserRepository(Protocol):
    async def create(self, email: str, name: str, password_hash: str) -> UserRecord: ...

    async def find_by_email(self, email: str) -> Optional[UserRecord]: ...

    async def find_by_id(self, user_id: uuid.UUID) -> Optional[UserRecord]: ...


class SQLUserRepository:
    """UserRepository backed by the users table. Soft-deleted rows are invisible."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, email: str, name: str, password_hash: str) -> UserRecord:
        user = User(email=email, name=name, password_hash=password_hash)
        async with storage_guard(self.db, "create", "user"):
            self.db.add(user)
            try:
                await self.db.commit()
            except IntegrityError as e:
                # uq_users_email_active lost a race with a concurrent signup
                await self.db.rollback()
                raise EmailTakenError() from e
            await self.db.refresh(user)
        return UserRecord.model_validate(user)

    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        q = select(User).where(User.email == email, User.deleted_at.is_(None))
        async with storage_guard(self.db, "find", "user"):
            result = await self.db.execute(q)
            user = result.scalars().first()
        return UserRecord.model_validate(user) if user else None

    async def find_by_id(self, user_id: uuid.UUID) -> Optional[UserRecord]:
        q = select(User).where(User.id == user_id, User.deleted_at.is_(None))
        async with storage_guard(self.db, "find", "user"):
            result = await self.db.execute(q)
            user = result.scalars().first()
        return UserRecord.model_validate(user) if user else None
