"""Secret hashing for account passwords and the master password"""

import logging
import bcrypt

logger = logging.getLogger(__name__)


class AuthService:
    """Service for hashing and verifying secrets with bcrypt"""

    DEFAULT_ROUNDS = 12
    # bcrypt only accepts secrets up to this many bytes
    MAX_SECRET_BYTES = 72

    @staticmethod
    def hash_secret(secret: str, rounds: int = DEFAULT_ROUNDS) -> str:
        """
        Hash a secret using bcrypt with a fresh salt

        Args:
            secret: Plain text secret
            rounds: bcrypt cost factor

        Returns:
            Hashed secret string
        """
        salt = bcrypt.gensalt(rounds=rounds)
        hashed = bcrypt.hashpw(secret.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    @staticmethod
    def verify_secret(plain_secret: str, hashed_secret: str) -> bool:
        """
        Verify a secret against its hash

        Args:
            plain_secret: Plain text secret to verify
            hashed_secret: Hash to compare against

        Returns:
            True if the secret matches, False otherwise (including malformed hashes)
        """
        try:
            return bcrypt.checkpw(
                plain_secret.encode("utf-8"), hashed_secret.encode("utf-8")
            )
        except ValueError as e:
            logger.warning(f"Rejected malformed secret hash: {e}")
            return False
