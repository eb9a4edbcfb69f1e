"""TokenCodecProtocol - Domain protocol for reset token generation and digesting.

Following hexagonal architecture:
- Domain defines what it needs (protocol/port)
- Infrastructure provides implementation (adapter)
- Application layer uses protocol, not concrete implementation
"""

from typing import Protocol


class TokenCodecProtocol(Protocol):
    """Protocol for raw reset token generation and one-way digesting.

    The raw token goes to the user by email. Only digest(raw) is stored.

    Implementations:
        - ResetTokenCodec: account_recovery/infrastructure/security/reset_token_codec.py
    """

    def generate_raw_token(self) -> str:
        """Generate a URL-safe, unpadded raw token.

        Returns:
            Token string backed by at least 32 bytes from a CSPRNG.
        """
        ...

    def digest(self, raw_token: str) -> str:
        """Compute the storage digest of a raw token.

        Args:
            raw_token: Token as received from the user.

        Returns:
            Fixed-width hex digest. Same input always yields same output.
        """
        ...
