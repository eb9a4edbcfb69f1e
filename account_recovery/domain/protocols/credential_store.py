"""CredentialStore protocol for user credential persistence.

Port (interface) for hexagonal architecture. The user administration
service owns the user table; this port exposes only what password recovery
needs.
"""

from typing import Protocol
from uuid import UUID

from account_recovery.domain.entities.user import User


class CredentialStore(Protocol):
    """User credential store protocol (port).

    This is a Protocol (not ABC) for structural typing.
    Implementations don't need to inherit from this.

    Failure Mode:
        Storage failures raise TransientStorageError.

    Methods:
        find_by_email: Retrieve user by email (case-insensitive)
        find_by_id: Retrieve user by ID
        update_credential: Persist credential fields of an existing user
    """

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email address.

        Args:
            email: User's email address (case-insensitive).

        Returns:
            User if found, None otherwise.
        """
        ...

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID.

        Args:
            user_id: User's unique identifier.

        Returns:
            User if found, None otherwise.
        """
        ...

    async def update_credential(self, user: User) -> None:
        """Persist password and lockout fields of an existing user.

        Joins an open PasswordResetTokenRepository.atomic() block when both
        share a transaction.

        Args:
            user: User entity carrying the new credential state.
        """
        ...
