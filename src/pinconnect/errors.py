"""Domain error taxonomy.

Learn: Every error the core raises carries an ErrorKind tag. The HTTP
layer (api/errors.py) maps the tag to a status code; callers that need
finer control catch the concrete class. Nothing here is ever matched on
message text.

Configuration errors are a separate family: they are startup-fatal and
never reach a request handler.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Coarse error category. Values double as wire error codes."""

    VALIDATION = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"
    UNAUTHENTICATED = "UNAUTHORIZED"
    STORAGE_FAILURE = "DATABASE_ERROR"
    INTERNAL = "INTERNAL_SERVER_ERROR"


class PinConnectError(Exception):
    """Base class for all domain errors."""

    kind: ErrorKind = ErrorKind.INTERNAL
    default_message: str = "internal error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# ─── Validation ─────────────────────────────────────────


class ValidationError(PinConnectError):
    kind = ErrorKind.VALIDATION
    default_message = "invalid input"


class WeakInputError(ValidationError):
    default_message = "password must not be empty"


class InvalidCoordinatesError(ValidationError):
    default_message = (
        "latitude must be between -90 and 90 "
        "and longitude between -180 and 180"
    )


class InvalidReferencesError(ValidationError):
    default_message = "an anchor pin and at least one member pin are required"


# ─── Lookup / ownership ─────────────────────────────────


class NotFoundError(PinConnectError):
    kind = ErrorKind.NOT_FOUND
    default_message = "resource not found"


class PinNotFoundError(NotFoundError):
    """A connect references a pin that is missing or soft-deleted."""

    default_message = "referenced pin does not exist"

    def __init__(self, pin_id=None):
        self.pin_id = pin_id
        super().__init__()


class ForbiddenError(PinConnectError):
    kind = ErrorKind.FORBIDDEN
    default_message = "you do not own this resource"


class EmailTakenError(PinConnectError):
    kind = ErrorKind.CONFLICT
    default_message = "email already registered"


# ─── Authentication ─────────────────────────────────────


class InvalidCredentialsError(PinConnectError):
    kind = ErrorKind.UNAUTHENTICATED
    default_message = "invalid credentials"


class InvalidTokenError(PinConnectError):
    kind = ErrorKind.UNAUTHENTICATED
    default_message = "invalid token"


class TokenExpiredError(InvalidTokenError):
    default_message = "token has expired"


class MalformedTokenError(InvalidTokenError):
    pass


class UserNotFoundError(PinConnectError):
    kind = ErrorKind.UNAUTHENTICATED
    default_message = "user not found"


# ─── Infrastructure ─────────────────────────────────────


class StorageError(PinConnectError):
    """Unexpected backing-store failure, wrapped with operation context."""

    kind = ErrorKind.STORAGE_FAILURE

    def __init__(self, operation: str, entity: str):
        self.operation = operation
        self.entity = entity
        super().__init__(f"failed to {operation} {entity}")


class CredentialError(PinConnectError):
    """bcrypt could not process a stored hash (not a password mismatch)."""

    kind = ErrorKind.INTERNAL
    default_message = "credential check failed"


# ─── Configuration (startup-fatal) ──────────────────────


class ConfigurationError(Exception):
    """Raised while wiring the app; the process should not start."""


class MissingSecretError(ConfigurationError):
    def __init__(self):
        super().__init__("PINCONNECT_JWT_SECRET environment variable is not set")


class WeakSecretError(ConfigurationError):
    def __init__(self, min_length: int):
        super().__init__(
            f"PINCONNECT_JWT_SECRET must be at least {min_length} characters long"
        )
