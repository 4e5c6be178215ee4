"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication.
One token type only: a 24h bearer token carrying user_id and email.
There is no refresh token and no server-side revocation; logging out
means the client drops the token.

The signing secret is handed to TokenIssuer explicitly and checked in
the constructor. Build the issuer once at startup so a bad secret fails
the process instead of the first request.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from pinconnect.errors import (
    MalformedTokenError,
    MissingSecretError,
    TokenExpiredError,
    WeakSecretError,
)

MIN_SECRET_LENGTH = 32
DEFAULT_TTL = timedelta(hours=24)


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    email: str
    issued_at: datetime
    expires_at: datetime


class TokenIssuer:
    """Mint and validate signed bearer tokens."""

    def __init__(
        self,
        secret: str,
        ttl: timedelta = DEFAULT_TTL,
        algorithm: str = "HS256",
    ):
        if not secret:
            raise MissingSecretError()
        if len(secret) < MIN_SECRET_LENGTH:
            raise WeakSecretError(MIN_SECRET_LENGTH)
        self._secret = secret
        self.ttl = ttl
        self.algorithm = algorithm

    def issue(self, user_id: str, email: str, now: Optional[datetime] = None) -> str:
        """Create a signed token that expires ttl after issuance."""
        issued = now or datetime.now(timezone.utc)
        payload = {
            "user_id": str(user_id),
            "email": email,
            "iat": issued,
            "exp": issued + self.ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def validate(self, token: str) -> TokenClaims:
        """Verify and decode a token.

        Raises TokenExpiredError when past expiry and MalformedTokenError
        for anything else (bad signature, bad structure, missing claims).
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat", "user_id", "email"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError()
        except jwt.InvalidTokenError:
            raise MalformedTokenError()

        user_id, email = payload["user_id"], payload["email"]
        if not isinstance(user_id, str) or not user_id or not isinstance(email, str):
            raise MalformedTokenError()

        return TokenClaims(
            user_id=user_id,
            email=email,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
