"""pinconnect CLI — run the server, make a secret, seed demo data, peek at pins.

Usage:
    pinconnect serve --port 8088                 # Run the API with uvicorn
    pinconnect gen-secret                        # Print a JWT secret (>= 32 chars)
    pinconnect seed-triangle                     # Demo user + 3 pins + 1 connect
    pinconnect seed-test-data                    # Test user + 4 pins + 1 connect
    pinconnect login a@x.com                     # Print a bearer token
    pinconnect pins                              # List your pins (needs PINCONNECT_TOKEN)
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import os
import secrets
import sys
from typing import Optional

import click
import httpx

from pinconnect import __version__

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "http://localhost:8088"

DEMO_EMAIL = "triangle@example.com"
DEMO_PASSWORD = "testpass123"
DEMO_PINS = [
    ("Vertex A", 35.6812, 139.7671),
    ("Vertex B", 35.6896, 139.7006),
    ("Vertex C", 35.6586, 139.7454),
]

TEST_EMAIL = "test@example.com"
TEST_PINS = [
    ("Start/Goal", 35.6812, 139.7671),
    ("Waypoint A", 35.6895, 139.6917),
    ("Waypoint B", 35.7000, 139.7000),
    ("Waypoint C", 35.6950, 139.7500),
]


def _api_url() -> str:
    return os.environ.get("PINCONNECT_API_URL", DEFAULT_API_URL).rstrip("/")


def _client(token: Optional[str] = None) -> httpx.AsyncClient:
    """Build an async HTTP client pointed at the pinconnect API."""
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    return httpx.AsyncClient(base_url=_api_url(), headers=headers, timeout=30.0)


def _token_from_env(token: Optional[str]) -> str:
    tok = token or os.environ.get("PINCONNECT_TOKEN")
    if not tok:
        click.secho(
            "Error: --token required (or set PINCONNECT_TOKEN env var)",
            fg="red",
            err=True,
        )
        sys.exit(1)
    return tok


def _run(coro):
    """Run a coroutine from a click handler, even inside a running loop."""
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
        return pool.submit(asyncio.run, coro).result()


def _fail_on_error(r: httpx.Response) -> None:
    if r.is_success:
        return
    try:
        message = r.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        message = r.text
    click.secho(f"Error {r.status_code}: {message}", fg="red", err=True)
    sys.exit(1)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="pinconnect")
def main():
    """pinconnect: pins, connects and the accounts that own them."""


@main.command()
@click.option("--host", default=None, help="Bind address (default: settings.host)")
@click.option("--port", default=None, type=int, help="Port (default: settings.port)")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the API server."""
    import uvicorn

    from pinconnect.config import settings

    uvicorn.run(
        "pinconnect.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@main.command("gen-secret")
@click.option("--bytes", "nbytes", default=48, show_default=True, help="Random bytes")
def gen_secret(nbytes: int):
    """Print a random secret for PINCONNECT_JWT_SECRET."""
    from pinconnect.auth.jwt import MIN_SECRET_LENGTH

    secret = secrets.token_urlsafe(nbytes)
    if len(secret) < MIN_SECRET_LENGTH:
        click.secho(
            f"Error: {nbytes} bytes gives a secret shorter than "
            f"{MIN_SECRET_LENGTH} characters",
            fg="red",
            err=True,
        )
        sys.exit(1)
    click.echo(secret)


# ---------------------------------------------------------------------------
# pinconnect seed-triangle / seed-test-data
# ---------------------------------------------------------------------------


@main.command("seed-triangle")
def seed_triangle():
    """Create a demo user with three pins joined by one connect.

    Any earlier demo user (and its pins/connects) is removed first.
    """
    _run(
        _seed_demo(
            DEMO_EMAIL,
            "Triangle Demo",
            DEMO_PINS,
            "Triangle",
            # B, C, then back to A: the member list closes the loop
            lambda anchor, rest: [*rest, anchor],
        )
    )


@main.command("seed-test-data")
def seed_test_data():
    """Create a test user with a start pin connected to three waypoints.

    Any earlier test user (and its pins/connects) is removed first.
    """
    _run(
        _seed_demo(
            TEST_EMAIL,
            "Test User",
            TEST_PINS,
            "Test Route",
            lambda anchor, rest: rest,
        )
    )


async def _seed_demo(email, display_name, pin_specs, connect_name, members_of):
    """Replace one seeded account: user, its pins, and a single connect.

    members_of(anchor_id, other_ids) returns the connect's member list.
    """
    from sqlalchemy import delete, select

    from pinconnect.auth.password import CredentialVault
    from pinconnect.config import settings
    from pinconnect.db.engine import async_session_factory, dispose_engine
    from pinconnect.db.models import Connect, Pin, User
    from pinconnect.repositories.connects import SQLConnectRepository
    from pinconnect.repositories.pins import SQLPinRepository
    from pinconnect.repositories.users import SQLUserRepository
    from pinconnect.services.connect_service import ConnectService
    from pinconnect.services.pin_service import PinService

    async with async_session_factory() as db:
        click.echo(f"Cleaning up existing data for {email}...")
        old_ids = select(User.id).where(User.email == email)
        await db.execute(delete(Connect).where(Connect.user_id.in_(old_ids)))
        await db.execute(delete(Pin).where(Pin.user_id.in_(old_ids)))
        await db.execute(delete(User).where(User.email == email))
        await db.commit()

        vault = CredentialVault(rounds=settings.bcrypt_rounds)
        users = SQLUserRepository(db)
        user = await users.create(email, display_name, vault.hash(DEMO_PASSWORD))
        click.secho(f"✓ User {user.email} ({user.id})", fg="green")

        pins = PinService(SQLPinRepository(db))
        created = []
        for name, lat, lng in pin_specs:
            pin = await pins.create(user.id, name, lat, lng)
            created.append(pin)
            click.echo(f"  ✓ Pin {pin.name} ({pin.latitude}, {pin.longitude})")

        connects = ConnectService(SQLConnectRepository(db), pins)
        anchor, *rest = created
        connect = await connects.create(
            user.id,
            connect_name,
            anchor.id,
            members_of(anchor.id, [p.id for p in rest]),
            show=True,
        )
        click.secho(f"✓ Connect {connect.name} ({connect.id})", fg="green")

    await dispose_engine()
    click.echo(f"\nLogin with {email} / {DEMO_PASSWORD}")


# ---------------------------------------------------------------------------
# pinconnect login / pins
# ---------------------------------------------------------------------------


@main.command()
@click.argument("email")
@click.password_option(confirmation_prompt=False)
def login(email: str, password: str):
    """Log in and print a bearer token."""
    _run(_login_impl(email, password))


async def _login_impl(email: str, password: str):
    async with _client() as c:
        r = await c.post("/api/v1/auth/login", json={"email": email, "password": password})
        _fail_on_error(r)
        click.echo(r.json()["token"])


@main.command()
@click.option("--token", help="Bearer token (or set PINCONNECT_TOKEN)")
def pins(token: Optional[str]):
    """List your pins, newest first."""
    _run(_pins_impl(_token_from_env(token)))


async def _pins_impl(token: str):
    async with _client(token) as c:
        r = await c.get("/api/v1/pins")
        _fail_on_error(r)
        rows = r.json()

    if not rows:
        click.echo("No pins yet.")
        return

    click.secho(f"Pins ({len(rows)}):", bold=True)
    for p in rows:
        click.echo(
            f"  {p['id'][:8]}  {p['name'][:24]:24s}  "
            f"{p['latitude']:>10.5f}  {p['longitude']:>11.5f}"
        )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    main()
