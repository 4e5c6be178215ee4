"""Connect API routes."""

import uuid

from fastapi import APIRouter, Depends

from pinconnect.auth.dependencies import get_current_user
from pinconnect.dependencies import get_connect_service
from pinconnect.schemas.connect import ConnectCreate, ConnectRead, ConnectUpdate
from pinconnect.schemas.user import UserRead
from pinconnect.services.connect_service import ConnectService

router = APIRouter(prefix="/connects")


@router.post("", response_model=ConnectRead, status_code=201)
async def create_connect(
    body: ConnectCreate,
    user: UserRead = Depends(get_current_user),
    svc: ConnectService = Depends(get_connect_service),
):
    return await svc.create(user.id, body.name, body.pin_1, body.pin_2, body.show)


@router.get("", response_model=list[ConnectRead])
async def list_my_connects(
    user: UserRead = Depends(get_current_user),
    svc: ConnectService = Depends(get_connect_service),
):
    return await svc.list_by_owner(user.id)


@router.put("/{connect_id}", response_model=ConnectRead)
async def update_connect(
    connect_id: uuid.UUID,
    body: ConnectUpdate,
    user: UserRead = Depends(get_current_user),
    svc: ConnectService = Depends(get_connect_service),
):
    """Replace the supplied fields; `show` is always overwritten."""
    return await svc.update(
        connect_id,
        user.id,
        name=body.name,
        pin_1=body.pin_1,
        pin_2=body.pin_2,
        show=body.show,
    )


@router.delete("/{connect_id}")
async def delete_connect(
    connect_id: uuid.UUID,
    user: UserRead = Depends(get_current_user),
    svc: ConnectService = Depends(get_connect_service),
):
    await svc.delete(connect_id, user.id)
    return {"deleted": True}
