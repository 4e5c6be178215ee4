"""Health check endpoint.

Learn: Simple GET endpoint that verifies the server is running and the
user store answers a query. The check goes through AuthService so it
exercises the same session/repository path real requests use.
"""

from fastapi import APIRouter, Depends

from pinconnect import __version__
from pinconnect.auth.dependencies import get_auth_service
from pinconnect.errors import StorageError
from pinconnect.services.auth_service import AuthService

router = APIRouter()


@router.get("/health")
async def health_check(auth: AuthService = Depends(get_auth_service)):
    """Check server health and database connectivity."""
    checks = {"server": "ok", "version": __version__}

    try:
        await auth.health_check()
        checks["database"] = "ok"
    except StorageError as e:
        checks["database"] = f"error: {e.message}"

    status = "healthy" if checks["database"] == "ok" else "degraded"
    return {"status": status, **checks}
