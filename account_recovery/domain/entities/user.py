"""User domain entity holding credential state.

Pure business logic, no framework dependencies. Only the credential fields
the recovery flow reads or mutates are modeled; profile, role and region
data belong to other services.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import UUID


@dataclass
class User:
    """User credential entity.

    Business Rules:
        - A reset replaces the password hash and restarts the expiry clock
        - A reset unlocks the account and clears the failed login counter
        - A reset satisfies any pending forced password change

    Attributes:
        id: Unique user identifier
        username: Login name
        email: User email address
        password_hash: Bcrypt hashed password (never plaintext)
        is_active: Account active status
        account_non_locked: False while the account is locked
        failed_login_attempts: Counter for failed login attempts
        must_change_password: Forces a password change on next login
        email_verified: Email verification status
        last_password_change: When the password was last set
        password_expires_at: When the current password stops being accepted

    Example:
        >>> user.apply_password_reset("$2b$12$...", now, expiry_days=90)
        >>> user.failed_login_attempts
        0
    """

    id: UUID
    username: str
    email: str
    password_hash: str
    is_active: bool = True
    account_non_locked: bool = True
    failed_login_attempts: int = 0
    must_change_password: bool = False
    email_verified: bool = False
    last_password_change: datetime | None = None
    password_expires_at: datetime | None = None

    def apply_password_reset(
        self, password_hash: str, now: datetime, expiry_days: int
    ) -> None:
        """Replace the credential after a successful reset redemption.

        Args:
            password_hash: Hash of the new password.
            now: Redemption timestamp (UTC).
            expiry_days: Password expiry policy in days.

        Side Effects:
            - Sets password_hash, last_password_change and password_expires_at
            - Clears must_change_password
            - Resets failed_login_attempts to 0
            - Unlocks the account
        """
        self.password_hash = password_hash
        self.last_password_change = now
        self.password_expires_at = now + timedelta(days=expiry_days)
        self.must_change_password = False
        self.failed_login_attempts = 0
        self.account_non_locked = True
