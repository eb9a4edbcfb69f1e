"""Password reset request/response schemas.

Pydantic models for API request validation and response serialization.
Kept separate from domain entities - these are HTTP-layer concerns.

Endpoints:
    POST /api/v1/password-reset-tokens - Create reset token (request)
    POST /api/v1/password-resets       - Create reset (redeem)
"""

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from account_recovery.application.commands import (
    PasswordResetCompleted,
    PasswordResetRequested,
)

# bcrypt reads at most 72 bytes of input.
PASSWORD_MAX_BYTES = 72


# =============================================================================
# Password Reset Request
# =============================================================================


class PasswordResetTokenCreateRequest(BaseModel):
    """Request schema for password reset token creation.

    POST /api/v1/password-reset-tokens
    Returns: 202 Accepted (always the same body, to prevent user enumeration)
    """

    email: EmailStr = Field(
        ...,
        description="Email address for password reset",
        examples=["user@example.com"],
    )


class PasswordResetTokenCreateResponse(BaseModel):
    """Response schema for a password reset request (202 Accepted)."""

    message: str = Field(
        default=PasswordResetRequested().message,
        description="Success message (always same to prevent enumeration)",
    )


# =============================================================================
# Password Reset Redeem
# =============================================================================


class PasswordResetCreateRequest(BaseModel):
    """Request schema for password reset redemption.

    POST /api/v1/password-resets
    Returns: 200 OK
    """

    token: str = Field(
        ...,
        min_length=1,
        max_length=256,
        description="Reset token from the emailed link",
    )
    new_password: str = Field(
        ...,
        min_length=8,
        max_length=PASSWORD_MAX_BYTES,
        description="New password (8-72 characters)",
        examples=["NewSecurePass456!"],
    )
    confirm_password: str = Field(
        ...,
        description="Must repeat new_password",
        examples=["NewSecurePass456!"],
    )

    @field_validator("new_password")
    @classmethod
    def validate_password_bytes(cls, v: str) -> str:
        """Reject passwords bcrypt would silently truncate."""
        if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
        return v

    @model_validator(mode="after")
    def passwords_match(self) -> "PasswordResetCreateRequest":
        if self.new_password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class PasswordResetCreateResponse(BaseModel):
    """Response schema for a completed password reset (200 OK)."""

    message: str = Field(
        default=PasswordResetCompleted().message,
        description="Success message",
    )


# =============================================================================
# Errors
# =============================================================================


class ErrorResponse(BaseModel):
    """Problem details body (RFC 9457) for password reset failures."""

    type: str = Field(..., description="Error type identifier")
    title: str = Field(..., description="Short summary")
    status: int = Field(..., description="HTTP status code")
    detail: str = Field(..., description="User-facing explanation")
    instance: str = Field(..., description="Request path")
