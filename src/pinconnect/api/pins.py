"""Pin API routes.

Learn: Every route here requires a bearer token (applied at
include_router level in api/__init__.py). The handler passes the caller's
id to PinService, which decides NotFound vs Forbidden.
"""

import uuid

from fastapi import APIRouter, Depends

from pinconnect.auth.dependencies import get_current_user
from pinconnect.dependencies import get_pin_service
from pinconnect.schemas.pin import PinRead, PinWrite
from pinconnect.schemas.user import UserRead
from pinconnect.services.pin_service import PinService

router = APIRouter(prefix="/pins")


@router.post("", response_model=PinRead, status_code=201)
async def create_pin(
    body: PinWrite,
    user: UserRead = Depends(get_current_user),
    svc: PinService = Depends(get_pin_service),
):
    return await svc.create(user.id, body.name, body.latitude, body.longitude)


@router.get("", response_model=list[PinRead])
async def list_my_pins(
    user: UserRead = Depends(get_current_user),
    svc: PinService = Depends(get_pin_service),
):
    """The caller's live pins, newest first."""
    return await svc.list_by_owner(user.id)


@router.get("/{pin_id}", response_model=PinRead)
async def get_pin(pin_id: uuid.UUID, svc: PinService = Depends(get_pin_service)):
    """Any live pin. Reads are not ownership-gated."""
    return await svc.get(pin_id)


@router.put("/{pin_id}", response_model=PinRead)
async def update_pin(
    pin_id: uuid.UUID,
    body: PinWrite,
    user: UserRead = Depends(get_current_user),
    svc: PinService = Depends(get_pin_service),
):
    return await svc.update(pin_id, user.id, body.name, body.latitude, body.longitude)


@router.delete("/{pin_id}")
async def delete_pin(
    pin_id: uuid.UUID,
    user: UserRead = Depends(get_current_user),
    svc: PinService = Depends(get_pin_service),
):
    await svc.soft_delete(pin_id, user.id)
    return {"deleted": True}
