"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: Auth is applied at the include_router level using FastAPI's
dependencies parameter for the pin and connect routers. Handlers that
need the user object also ask for get_current_user themselves; FastAPI
resolves it once per request. Health and auth routers are open (the
auth router guards /me and /logout per route).
"""

from fastapi import APIRouter, Depends

from pinconnect.api.auth import router as auth_router
from pinconnect.api.connects import router as connects_router
from pinconnect.api.health import router as health_router
from pinconnect.api.pins import router as pins_router
from pinconnect.auth.dependencies import get_current_user

# All protected routers require authentication
_auth = [Depends(get_current_user)]

api_router = APIRouter(prefix="/api/v1")

# Open routes: no auth required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])

# Protected routes: require a valid bearer token
api_router.include_router(pins_router, tags=["pins"], dependencies=_auth)
api_router.include_router(connects_router, tags=["connects"], dependencies=_auth)
