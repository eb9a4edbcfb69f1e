"""Reset token codec.

Mints raw reset tokens and derives the digest that is stored in their
place.

Token Strategy:
    - 32 random bytes from the OS CSPRNG (256 bits of entropy)
    - URL-safe base64 without padding (43 characters), safe in a query string
    - SHA-256 lowercase hex digest (64 characters) is the only stored form
    - An unsalted fast hash is sufficient: the input is high-entropy random
      data, not a human-chosen secret
"""

import hashlib
import secrets

from account_recovery.core.constants import TOKEN_BYTES


class ResetTokenCodec:
    """Implements TokenCodecProtocol.

    Usage:
        codec = ResetTokenCodec()
        raw = codec.generate_raw_token()   # emailed to the user
        stored = codec.digest(raw)         # persisted
    """

    def __init__(self, token_bytes: int = TOKEN_BYTES) -> None:
        if token_bytes < TOKEN_BYTES:
            msg = f"Reset tokens need at least {TOKEN_BYTES} random bytes"
            raise ValueError(msg)
        self._token_bytes = token_bytes

    def generate_raw_token(self) -> str:
        """Generate a URL-safe, unpadded raw token.

        Example:
            >>> token = ResetTokenCodec().generate_raw_token()
            >>> len(token)
            43
        """
        return secrets.token_urlsafe(self._token_bytes)

    def digest(self, raw_token: str) -> str:
        """Return the SHA-256 lowercase hex digest of a raw token."""
        return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()
