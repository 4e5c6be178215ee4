"""Test fixtures — in-memory repositories and an app client wired to them.

Learn: Services only see the repository Protocols, so the suite swaps the
SQL implementations for dict-backed ones that follow the same rules:
- soft-deleted users/pins are invisible to every lookup
- pins list newest first, connects by id
- a second active user with the same email raises EmailTakenError

The HTTP client overrides the get_*_repository dependencies plus the
cached TokenIssuer/CredentialVault, so no database or env secret is
needed. bcrypt runs at 4 rounds to keep the suite fast.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from pinconnect.auth.jwt import TokenIssuer
from pinconnect.auth.password import CredentialVault
from pinconnect.errors import EmailTakenError
from pinconnect.schemas.connect import ConnectRead
from pinconnect.schemas.pin import PinRead
from pinconnect.schemas.user import UserRecord
from pinconnect.services.auth_service import AuthService
from pinconnect.services.connect_service import ConnectService
from pinconnect.services.pin_service import PinService

TEST_SECRET = "s" * 32 + "-pinconnect-test-secret"
TEST_PASSWORD = "pw123456"


class _Clock:
    """Strictly increasing timestamps so "newest first" is deterministic."""

    def __init__(self):
        self._now = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self._now += timedelta(milliseconds=1)
        return self._now


# ═══════════════════════════════════════════════════════════
# In-memory repositories
# ═══════════════════════════════════════════════════════════


class FakeUserRepository:
    def __init__(self, clock: Optional[_Clock] = None):
        self.clock = clock or _Clock()
        self.rows: dict[uuid.UUID, UserRecord] = {}

    async def create(self, email, name, password_hash):
        if await self.find_by_email(email):
            raise EmailTakenError()
        now = self.clock()
        record = UserRecord(
            id=uuid.uuid4(),
            email=email,
            name=name,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        self.rows[record.id] = record
        return record

    async def find_by_email(self, email):
        for record in self.rows.values():
            if record.email == email and record.deleted_at is None:
                return record
        return None

    async def find_by_id(self, user_id):
        record = self.rows.get(user_id)
        if record is None or record.deleted_at is not None:
            return None
        return record

    def remove(self, user_id):
        """Soft-delete a user behind the service's back."""
        record = self.rows[user_id]
        self.rows[user_id] = record.model_copy(update={"deleted_at": self.clock()})


class FakePinRepository:
    def __init__(self, clock: Optional[_Clock] = None):
        self.clock = clock or _Clock()
        self.rows: dict[uuid.UUID, PinRead] = {}
        self.calls = 0

    async def create(self, owner_id, name, latitude, longitude):
        self.calls += 1
        now = self.clock()
        pin = PinRead(
            id=uuid.uuid4(),
            name=name,
            user_id=owner_id,
            latitude=latitude,
            longitude=longitude,
            created_at=now,
            edited_at=now,
        )
        self.rows[pin.id] = pin
        return pin

    async def find_by_id(self, pin_id):
        self.calls += 1
        pin = self.rows.get(pin_id)
        if pin is None or pin.deleted_at is not None:
            return None
        return pin

    async def find_by_owner(self, owner_id):
        self.calls += 1
        live = [
            p for p in self.rows.values()
            if p.user_id == owner_id and p.deleted_at is None
        ]
        return sorted(live, key=lambda p: p.created_at, reverse=True)

    async def update(self, pin_id, name, latitude, longitude):
        self.calls += 1
        pin = await self.find_by_id(pin_id)
        if pin is None:
            return None
        pin = pin.model_copy(
            update={
                "name": name,
                "latitude": latitude,
                "longitude": longitude,
                "edited_at": self.clock(),
            }
        )
        self.rows[pin_id] = pin
        return pin

    async def soft_delete(self, pin_id):
        self.calls += 1
        pin = await self.find_by_id(pin_id)
        if pin is None:
            return False
        self.rows[pin_id] = pin.model_copy(update={"deleted_at": self.clock()})
        return True


class FakeConnectRepository:
    def __init__(self):
        self.rows: dict[uuid.UUID, ConnectRead] = {}

    async def create(self, owner_id, name, pin_1, pin_2, show):
        connect = ConnectRead(
            id=uuid.uuid4(),
            user_id=owner_id,
            name=name,
            pin_1=pin_1,
            pin_2=list(pin_2),
            show=show,
        )
        self.rows[connect.id] = connect
        return connect

    async def find_by_id(self, connect_id):
        return self.rows.get(connect_id)

    async def find_by_owner(self, owner_id):
        mine = [c for c in self.rows.values() if c.user_id == owner_id]
        return sorted(mine, key=lambda c: c.id)

    async def update(self, connect_id, name, pin_1, pin_2, show):
        if connect_id not in self.rows:
            return None
        connect = self.rows[connect_id].model_copy(
            update={"name": name, "pin_1": pin_1, "pin_2": list(pin_2), "show": show}
        )
        self.rows[connect_id] = connect
        return connect

    async def delete(self, connect_id):
        return self.rows.pop(connect_id, None) is not None


# ═══════════════════════════════════════════════════════════
# Core fixtures
# ═══════════════════════════════════════════════════════════


@pytest.fixture()
def clock():
    return _Clock()


@pytest.fixture()
def vault():
    return CredentialVault(rounds=4)


@pytest.fixture()
def issuer():
    return TokenIssuer(TEST_SECRET)


@pytest.fixture()
def user_repo(clock):
    return FakeUserRepository(clock)


@pytest.fixture()
def pin_repo(clock):
    return FakePinRepository(clock)


@pytest.fixture()
def connect_repo():
    return FakeConnectRepository()


@pytest.fixture()
def auth_service(user_repo, vault, issuer):
    return AuthService(user_repo, vault, issuer)


@pytest.fixture()
def pin_service(pin_repo):
    return PinService(pin_repo)


@pytest.fixture()
def connect_service(connect_repo, pin_service):
    return ConnectService(connect_repo, pin_service)


# ═══════════════════════════════════════════════════════════
# HTTP client
# ═══════════════════════════════════════════════════════════


@pytest_asyncio.fixture()
async def client(user_repo, pin_repo, connect_repo, vault, issuer):
    """HTTP client with storage and auth collaborators overridden.

    Learn: Auth is NOT mocked out here. Tests sign up and log in through
    the real routes and send real bearer tokens, so the whole
    header → TokenIssuer → UserRepository path is exercised.
    """
    from pinconnect.auth.dependencies import get_credential_vault, get_token_issuer
    from pinconnect.dependencies import (
        get_connect_repository,
        get_pin_repository,
        get_user_repository,
    )
    from pinconnect.main import app

    app.dependency_overrides[get_user_repository] = lambda: user_repo
    app.dependency_overrides[get_pin_repository] = lambda: pin_repo
    app.dependency_overrides[get_connect_repository] = lambda: connect_repo
    app.dependency_overrides[get_credential_vault] = lambda: vault
    app.dependency_overrides[get_token_issuer] = lambda: issuer

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture()
def register(client):
    """Factory: sign up + log in through the API, return (user, headers)."""

    async def _register(email: Optional[str] = None, name: str = "Test User"):
        email = email or f"user-{uuid.uuid4().hex[:8]}@example.com"
        r = await client.post(
            "/api/v1/auth/signup",
            json={"email": email, "password": TEST_PASSWORD, "name": name},
        )
        assert r.status_code == 201, r.text
        r = await client.post(
            "/api/v1/auth/login",
            json={"email": email, "password": TEST_PASSWORD},
        )
        assert r.status_code == 200, r.text
        body = r.json()
        return body["user"], {"Authorization": f"Bearer {body['token']}"}

    return _register
