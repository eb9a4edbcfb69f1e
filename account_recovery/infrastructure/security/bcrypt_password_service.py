"""Bcrypt password hashing service (adapter).

Implements PasswordHashingProtocol using bcrypt.

Security:
    - Adaptive cost factor (each +1 doubles computation time)
    - Random salt per hash
    - bcrypt only reads the first 72 bytes; longer input is refused upstream
"""

import bcrypt


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Usage:
        from account_recovery.core.container import get_password_hasher

        hasher = get_password_hasher()
        password_hash = hasher.hash_password("SecurePass123!")
        hasher.verify_password("SecurePass123!", password_hash)
    """

    def __init__(self, cost_factor: int = 12) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: Bcrypt cost factor (10-20).

        Raises:
            ValueError: If cost factor is outside 10..20.
        """
        if cost_factor < 10:
            msg = "Cost factor must be at least 10 for security"
            raise ValueError(msg)
        if cost_factor > 20:
            msg = "Cost factor above 20 is impractically slow"
            raise ValueError(msg)

        self._cost_factor = cost_factor

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password using bcrypt.

        Returns:
            60-character bcrypt hash ($2b$<cost>$<salt><hash>).
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a bcrypt hash.

        Returns False for malformed hashes instead of raising.
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8")
            )
        except (ValueError, AttributeError):
            return False
