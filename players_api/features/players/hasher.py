"""Password hashing for player credentials."""

import structlog
from passlib.context import CryptContext

from .exceptions import HashingError

logger = structlog.get_logger(__name__)


class PasslibHasher:
    """Hash passwords with passlib, Argon2id by default."""

    def __init__(self, schemes: list[str] | None = None):
        """Initialize the hashing context.

        :param schemes: passlib scheme names, the first one is used for new hashes
        """
        self.pwd_context = CryptContext(
            schemes=schemes or ["argon2"], deprecated="auto"
        )

    def hash(self, password: str) -> bytes:
        """Hash a plaintext password.

        :param password: Plaintext password
        :returns: Encoded hash
        :raises HashingError: If the hashing backend fails
        """
        try:
            return self.pwd_context.hash(password).encode("utf-8")
        except (ValueError, TypeError, RuntimeError) as e:
            logger.error("generating_hash_from_password_failed", error=str(e))
            raise HashingError(original_error=e) from e

    def verify(self, password: str, hashed_password: bytes) -> bool:
        """Verify a password against its hash."""
        try:
            return self.pwd_context.verify(password, hashed_password.decode("utf-8"))
        except (ValueError, TypeError, RuntimeError):
            return False
