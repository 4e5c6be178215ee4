"""Repository and service wiring for FastAPI route handlers.

Learn: Each request gets one AsyncSession (get_db) and repositories are
built around it here. FastAPI caches a dependency within a request, so
the pin repository handed to ConnectService is the same one PinService
uses. Tests swap the get_*_repository functions for in-memory stores via
app.dependency_overrides.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pinconnect.db.engine import get_db
from pinconnect.repositories.connects import ConnectRepository, SQLConnectRepository
from pinconnect.repositories.pins import PinRepository, SQLPinRepository
from pinconnect.repositories.users import SQLUserRepository, UserRepository
from pinconnect.services.connect_service import ConnectService
from pinconnect.services.pin_service import PinService


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return SQLUserRepository(db)


def get_pin_repository(db: AsyncSession = Depends(get_db)) -> PinRepository:
    return SQLPinRepository(db)


def get_connect_repository(db: AsyncSession = Depends(get_db)) -> ConnectRepository:
    return SQLConnectRepository(db)


def get_pin_service(pins: PinRepository = Depends(get_pin_repository)) -> PinService:
    return PinService(pins)


def get_connect_service(
    connects: ConnectRepository = Depends(get_connect_repository),
    pins: PinService = Depends(get_pin_service),
) -> ConnectService:
    return ConnectService(connects, pins)
