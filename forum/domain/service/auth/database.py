"""Password storage and verification."""

from passlib.context import CryptContext

from forum.domain.model import User

from .capability import AuthCapability


class DatabaseAuthenticatable:
    """Hashes passwords with bcrypt and checks them against stored hashes."""

    capability = AuthCapability.DATABASE_AUTHENTICATABLE

    def __init__(self, bcrypt_rounds: int = 12) -> None:
        """Initialize the hashing context.

        Args:
            bcrypt_rounds: bcrypt work factor (4-31)
        """
        self.pwd_context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=bcrypt_rounds
        )
        # Verified when no user matched, so a miss costs as much as a hit
        self._dummy_hash = self.pwd_context.hash("dummy-password")

    def hash_password(self, password: str) -> str:
        """One-way hash for storage."""
        return self.pwd_context.hash(password)

    def valid_password(self, user: User | None, password: str) -> bool:
        """Check ``password`` against the user's stored hash.

        Users without a password (OAuth-only accounts) never match.
        """
        if user is None or not user.password_hash:
            self.pwd_context.verify(password, self._dummy_hash)
            return False
        return self.pwd_context.verify(password, user.password_hash)
