"""Auth service — signup, login, and token → user resolution.

Learn: Stateless per call. The service owns no session state; it composes
three injected collaborators:
- UserRepository → where accounts live
- CredentialVault → bcrypt hashing
- TokenIssuer → 24h bearer tokens

Login failures are deliberately uniform: an unknown email and a wrong
password both raise InvalidCredentialsError with the same message.
"""

import re
import uuid

import structlog

from pinconnect.auth.jwt import TokenIssuer
from pinconnect.auth.password import CredentialVault
from pinconnect.errors import (
    EmailTakenError,
    InvalidCredentialsError,
    MalformedTokenError,
    UserNotFoundError,
    ValidationError,
)
from pinconnect.repositories.users import UserRepository
from pinconnect.schemas.user import UserRead

logger = structlog.get_logger()

EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")
MIN_PASSWORD_LENGTH = 8

# Reserved (RFC 2606) address used by health_check; never a valid signup.
HEALTH_CHECK_EMAIL = "health-check@connection.invalid"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class AuthService:
    """Business logic for accounts and sessions."""

    def __init__(
        self,
        users: UserRepository,
        vault: CredentialVault,
        tokens: TokenIssuer,
    ):
        self.users = users
        self.vault = vault
        self.tokens = tokens

    # ─── Signup ─────────────────────────────────────────

    async def signup(self, email: str, password: str, name: str) -> UserRead:
        """Register a new account and return it without the hash."""
        email = normalize_email(email)
        name = (name or "").strip()
        if not EMAIL_RE.match(email):
            raise ValidationError("invalid email format")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )
        if not name:
            raise ValidationError("name is required")

        if await self.users.find_by_email(email):
            raise EmailTakenError()

        password_hash = self.vault.hash(password)
        record = await self.users.create(email, name, password_hash)
        logger.info("auth.signup", user_id=str(record.id))
        return record.redacted()

    # ─── Login ──────────────────────────────────────────

    async def login(self, email: str, password: str) -> tuple[str, UserRead]:
        """Check credentials and issue a bearer token."""
        record = await self.users.find_by_email(normalize_email(email))
        if record is None or not self.vault.verify(password, record.password_hash):
            logger.info("auth.login_failed")
            raise InvalidCredentialsError()

        token = self.tokens.issue(str(record.id), record.email)
        logger.info("auth.login", user_id=str(record.id))
        return token, record.redacted()

    # ─── Identity ───────────────────────────────────────

    async def resolve_identity(self, token: str) -> UserRead:
        """Validate a token and load the user it names.

        Raises the InvalidTokenError family for bad/expired tokens and
        UserNotFoundError when the account is gone.
        """
        claims = self.tokens.validate(token)
        try:
            user_id = uuid.UUID(claims.user_id)
        except ValueError:
            raise MalformedTokenError()

        record = await self.users.find_by_id(user_id)
        if record is None:
            raise UserNotFoundError()
        return record.redacted()

    # ─── Health ─────────────────────────────────────────

    async def health_check(self) -> None:
        """Touch the user store; StorageError propagates if it is down.

        Learn: Looks up an address that can never exist, so the check
        works on an empty database and never depends on a specific row.
        """
        await self.users.find_by_email(HEALTH_CHECK_EMAIL)
