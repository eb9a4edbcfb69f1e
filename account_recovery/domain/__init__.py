"""Domain layer - Pure business logic.

Structure:
- entities/: Domain entities (User credential, ResetToken)
- enums/: Token lifecycle states
- errors/: Result errors and adapter exceptions
- protocols/: Ports (repositories, codec, hashing, notifications, URLs)

The domain layer defines WHAT the business does, not HOW it's implemented.
"""
