"""Password hashing protocol for domain layer.

Infrastructure layer provides concrete implementations (bcrypt).

Architecture:
    - Domain defines protocol (port)
    - Infrastructure implements adapter (BcryptPasswordService)
    - No framework dependencies in domain
"""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Password hashing and verification interface.

    Implementations:
        - BcryptPasswordService: bcrypt with cost factor 12 (production)
    """

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password.

        Args:
            password: Plaintext password to hash.

        Returns:
            Hashed password string (bcrypt format: $2b$12$...).

        Note:
            - NEVER store plaintext passwords
            - Same password produces different hashes (random salt)
        """
        ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a hash.

        Returns:
            True if password matches hash, False otherwise.
        """
        ...
