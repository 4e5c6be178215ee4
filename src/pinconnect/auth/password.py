"""Password hashing utilities.

Learn: Uses bcrypt for secure password hashing. bcrypt automatically
handles salting and is resistant to rainbow table attacks.
The work factor (rounds=12) takes ~100ms per hash on modern hardware.

bcrypt only looks at the first 72 bytes of its input. Longer passwords
are rejected instead of truncated, so two different passwords can never
verify against the same hash.
"""

import bcrypt

from pinconnect.errors import CredentialError, WeakInputError

DEFAULT_ROUNDS = 12
MAX_PASSWORD_BYTES = 72


class CredentialVault:
    """Hash and verify passwords with a fixed bcrypt work factor."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a password with bcrypt.

        Learn: bcrypt includes a random salt automatically and produces
        hashes starting with "$2b$<rounds>$".
        """
        if not password:
            raise WeakInputError()
        pw_bytes = password.encode("utf-8")
        if len(pw_bytes) > MAX_PASSWORD_BYTES:
            raise WeakInputError(
                f"password must be at most {MAX_PASSWORD_BYTES} bytes"
            )
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a password against its hash.

        Returns False on mismatch. Raises CredentialError when the stored
        hash itself is unusable, so callers can tell a wrong password from
        a broken record.
        """
        pw_bytes = (password or "").encode("utf-8")
        if not pw_bytes or len(pw_bytes) > MAX_PASSWORD_BYTES:
            # hash() never accepts these, so nothing stored can match
            return False
        try:
            return bcrypt.checkpw(pw_bytes, password_hash.encode("utf-8"))
        except (ValueError, TypeError, AttributeError) as e:
            raise CredentialError() from e
