"""Domain protocols (ports) package.

Protocol definitions the domain and application layers need.
Infrastructure adapters implement these protocols without inheritance.

Usage:
    from account_recovery.domain.protocols import (
        CredentialStore,
        PasswordResetTokenRepository,
        TokenCodecProtocol,
    )
"""

# Service protocols
from account_recovery.domain.protocols.logger_protocol import LoggerProtocol
from account_recovery.domain.protocols.notification_gateway_protocol import (
    NotificationGatewayProtocol,
)
from account_recovery.domain.protocols.password_hashing_protocol import (
    PasswordHashingProtocol,
)
from account_recovery.domain.protocols.reset_url_builder_protocol import (
    ResetUrlBuilderProtocol,
)
from account_recovery.domain.protocols.token_codec_protocol import TokenCodecProtocol

# Repository protocols
from account_recovery.domain.protocols.credential_store import CredentialStore
from account_recovery.domain.protocols.password_reset_token_repository import (
    PasswordResetTokenRepository,
)

__all__ = [
    # Service protocols
    "LoggerProtocol",
    "NotificationGatewayProtocol",
    "PasswordHashingProtocol",
    "ResetUrlBuilderProtocol",
    "TokenCodecProtocol",
    # Repository protocols
    "CredentialStore",
    "PasswordResetTokenRepository",
]
