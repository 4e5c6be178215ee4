"""PinService tests — coordinates, ownership, soft delete."""

import math
import uuid

import pytest

from pinconnect.errors import (
    ErrorKind,
    ForbiddenError,
    InvalidCoordinatesError,
    NotFoundError,
    ValidationError,
)
from pinconnect.services.pin_service import is_valid_coordinate

OWNER = uuid.UUID("00000000-0000-0000-0000-0000000000a1")
OTHER = uuid.UUID("00000000-0000-0000-0000-0000000000b2")


# ═══════════════════════════════════════════════════════════
# Coordinate validation
# ═══════════════════════════════════════════════════════════


@pytest.mark.parametrize(
    "lat,lng",
    [(0, 0), (90, 180), (-90, -180), (90, -180), (-90, 180), (35.68, 139.76)],
)
def test_valid_coordinates(lat, lng):
    assert is_valid_coordinate(lat, lng) is True


@pytest.mark.parametrize(
    "lat,lng",
    [
        (math.nextafter(90, math.inf), 0),
        (math.nextafter(-90, -math.inf), 0),
        (0, math.nextafter(180, math.inf)),
        (0, math.nextafter(-180, -math.inf)),
        (91, 0),
        (0, -181),
        (math.nan, 0),
        (0, math.nan),
        (math.inf, 0),
    ],
)
def test_invalid_coordinates(lat, lng):
    assert is_valid_coordinate(lat, lng) is False


# ═══════════════════════════════════════════════════════════
# Create / get / list
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_and_get(pin_service):
    pin = await pin_service.create(OWNER, "Tokyo Station", 35.6812, 139.7671)
    assert pin.user_id == OWNER
    assert pin.latitude == 35.6812
    assert pin.longitude == 139.7671
    assert pin.deleted_at is None

    fetched = await pin_service.get(pin.id)
    assert fetched == pin


@pytest.mark.asyncio
async def test_create_out_of_range_touches_no_storage(pin_service, pin_repo):
    with pytest.raises(InvalidCoordinatesError) as exc:
        await pin_service.create(OWNER, "Nowhere", 95.0, 0.0)
    assert exc.value.kind is ErrorKind.VALIDATION
    assert pin_repo.calls == 0


@pytest.mark.asyncio
async def test_create_blank_name(pin_service):
    with pytest.raises(ValidationError):
        await pin_service.create(OWNER, "   ", 10.0, 10.0)


@pytest.mark.asyncio
async def test_get_is_not_ownership_gated(pin_service):
    pin = await pin_service.create(OWNER, "Public", 1.0, 2.0)
    # reads carry no caller at all
    assert (await pin_service.get(pin.id)).id == pin.id


@pytest.mark.asyncio
async def test_get_missing(pin_service):
    with pytest.raises(NotFoundError) as exc:
        await pin_service.get(uuid.uuid4())
    assert exc.value.kind is ErrorKind.NOT_FOUND


@pytest.mark.asyncio
async def test_list_newest_first(pin_service):
    first = await pin_service.create(OWNER, "first", 1.0, 1.0)
    second = await pin_service.create(OWNER, "second", 2.0, 2.0)
    await pin_service.create(OTHER, "not mine", 3.0, 3.0)

    pins = await pin_service.list_by_owner(OWNER)
    assert [p.id for p in pins] == [second.id, first.id]


@pytest.mark.asyncio
async def test_list_empty_is_a_list(pin_service):
    assert await pin_service.list_by_owner(OWNER) == []


# ═══════════════════════════════════════════════════════════
# Update
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_update_overwrites_and_touches_edited_at(pin_service):
    pin = await pin_service.create(OWNER, "old", 1.0, 1.0)
    updated = await pin_service.update(pin.id, OWNER, "new", -33.86, 151.21)
    assert updated.name == "new"
    assert (updated.latitude, updated.longitude) == (-33.86, 151.21)
    assert updated.edited_at > pin.edited_at
    assert updated.created_at == pin.created_at


@pytest.mark.asyncio
async def test_update_by_non_owner(pin_service):
    pin = await pin_service.create(OWNER, "mine", 1.0, 1.0)
    with pytest.raises(ForbiddenError) as exc:
        await pin_service.update(pin.id, OTHER, "hijack", 1.0, 1.0)
    assert exc.value.kind is ErrorKind.FORBIDDEN
    assert (await pin_service.get(pin.id)).name == "mine"


@pytest.mark.asyncio
async def test_update_missing(pin_service):
    with pytest.raises(NotFoundError):
        await pin_service.update(uuid.uuid4(), OWNER, "x", 1.0, 1.0)


@pytest.mark.asyncio
async def test_update_validates_before_lookup(pin_service, pin_repo):
    # bad coordinates win over a pin id that does not exist
    with pytest.raises(InvalidCoordinatesError):
        await pin_service.update(uuid.uuid4(), OWNER, "x", 0.0, 200.0)
    assert pin_repo.calls == 0


# ═══════════════════════════════════════════════════════════
# Soft delete
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_soft_delete_hides_pin_everywhere(pin_service, pin_repo):
    pin = await pin_service.create(OWNER, "gone soon", 1.0, 1.0)
    await pin_service.soft_delete(pin.id, OWNER)

    assert pin_repo.rows[pin.id].deleted_at is not None
    with pytest.raises(NotFoundError):
        await pin_service.get(pin.id)
    with pytest.raises(NotFoundError):
        await pin_service.update(pin.id, OWNER, "back", 1.0, 1.0)
    with pytest.raises(NotFoundError):
        await pin_service.soft_delete(pin.id, OWNER)
    assert await pin_service.list_by_owner(OWNER) == []


@pytest.mark.asyncio
async def test_soft_delete_by_non_owner(pin_service):
    pin = await pin_service.create(OWNER, "mine", 1.0, 1.0)
    with pytest.raises(ForbiddenError):
        await pin_service.soft_delete(pin.id, OTHER)
    assert (await pin_service.get(pin.id)).id == pin.id
