"""Auth API — signup, login, logout, current user.

Learn: Routes for the account lifecycle:
- POST /auth/signup → create a new user account
- POST /auth/login → email/password → bearer token + user
- POST /auth/logout → acknowledgement only (tokens are stateless)
- GET /auth/me → current user info
"""

from fastapi import APIRouter, Depends

from pinconnect.auth.dependencies import get_auth_service, get_current_user
from pinconnect.schemas.user import AuthResponse, LoginRequest, SignupRequest, UserRead
from pinconnect.services.auth_service import AuthService

router = APIRouter(prefix="/auth")


@router.post("/signup", response_model=UserRead, status_code=201)
async def signup(body: SignupRequest, auth: AuthService = Depends(get_auth_service)):
    """Create a new user account."""
    return await auth.signup(body.email, body.password, body.name)


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    """Login with email and password → bearer token."""
    token, user = await auth.login(body.email, body.password)
    return AuthResponse(token=token, user=user)


@router.post("/logout")
async def logout(user: UserRead = Depends(get_current_user)):
    """Nothing to revoke server-side; the client discards its token."""
    return {"message": "logged out"}


@router.get("/me", response_model=UserRead)
async def get_me(user: UserRead = Depends(get_current_user)):
    """Get the current authenticated user's info."""
    return user
