"""Centralized constants for internal implementation details.

Constants here are NOT environment-specific configuration. For settings
that vary per deployment, use `account_recovery.core.config` instead.

Categories:
- Token lengths: Fixed sizes for reset tokens and their digests
- Policy defaults: Token TTL and password expiry used when unset
- Limits: Truncation limits for audit metadata
- Message keys: Notification subject keys and template names
"""

# =============================================================================
# Token and Digest Lengths
# =============================================================================

TOKEN_BYTES: int = 32
"""Random bytes behind each raw reset token (32 bytes = 256 bits)."""

TOKEN_DIGEST_LENGTH: int = 64
"""Length of the hex-encoded SHA-256 digest stored for each token."""


# =============================================================================
# Policy Defaults
# =============================================================================

RESET_TOKEN_TTL_MINUTES_DEFAULT: int = 45
"""Lifetime of a reset token before it becomes inert."""

PASSWORD_EXPIRY_DAYS_DEFAULT: int = 90
"""Days until a password set through a reset must be changed again."""


# =============================================================================
# Audit Limits
# =============================================================================

AUDIT_FIELD_MAX_LENGTH: int = 255
"""Maximum stored length for the requester user agent."""

REQUEST_IP_MAX_LENGTH: int = 45
"""Maximum stored length for the requester IP (fits IPv4-mapped IPv6)."""


# =============================================================================
# Notification Keys
# =============================================================================

PASSWORD_RESET_SUBJECT_KEY: str = "mail.passwordreset.subject"
PASSWORD_RESET_TEMPLATE: str = "mail/password-reset"

PASSWORD_CHANGED_SUBJECT_KEY: str = "mail.passwordchanged.subject"
PASSWORD_CHANGED_TEMPLATE: str = "mail/password-changed"

DEFAULT_LOCALE: str = "en"
