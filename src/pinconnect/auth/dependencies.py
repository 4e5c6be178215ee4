"""FastAPI auth dependencies.

Learn: These are used as Depends() in route handlers to build the auth
service and to turn an `Authorization: Bearer <token>` header into the
current user.

get_token_issuer() and get_credential_vault() are cached: they read
settings exactly once. main.py calls get_token_issuer() during startup so
a missing/short secret kills the process before it accepts traffic.
"""

from datetime import timedelta
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header

from pinconnect.auth.jwt import TokenIssuer
from pinconnect.auth.password import CredentialVault
from pinconnect.config import settings
from pinconnect.dependencies import get_user_repository
from pinconnect.errors import MalformedTokenError
from pinconnect.repositories.users import UserRepository
from pinconnect.schemas.user import UserRead
from pinconnect.services.auth_service import AuthService


@lru_cache
def get_token_issuer() -> TokenIssuer:
    return TokenIssuer(
        settings.jwt_secret,
        ttl=timedelta(hours=settings.token_ttl_hours),
        algorithm=settings.jwt_algorithm,
    )


@lru_cache
def get_credential_vault() -> CredentialVault:
    return CredentialVault(rounds=settings.bcrypt_rounds)


def get_auth_service(
    users: UserRepository = Depends(get_user_repository),
    vault: CredentialVault = Depends(get_credential_vault),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(users, vault, tokens)


def bearer_token(authorization: Optional[str] = Header(None)) -> str:
    """Pull the raw token out of the Authorization header."""
    if not authorization or not authorization.startswith("Bearer "):
        raise MalformedTokenError("missing or malformed authorization header")
    token = authorization[7:].strip()
    if not token:
        raise MalformedTokenError("missing or malformed authorization header")
    return token


async def get_current_user(
    token: str = Depends(bearer_token),
    auth: AuthService = Depends(get_auth_service),
) -> UserRead:
    """Resolve the bearer token to a user (401 via the error handler otherwise)."""
    return await auth.resolve_identity(token)
