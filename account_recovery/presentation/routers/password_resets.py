"""Password resets resource router.

Endpoints:
    POST /api/v1/password-reset-tokens - Create password reset token (request reset)
    POST /api/v1/password-resets       - Create password reset (execute reset)

Every token problem maps to one 400 response with one message; the reason
never leaves the service logs.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from account_recovery.application.commands import (
    ConfirmPasswordReset,
    RequestPasswordReset,
)
from account_recovery.application.services import PasswordResetService
from account_recovery.core.container import get_password_reset_service
from account_recovery.core.errors import DomainError, ValidationError
from account_recovery.core.result import Failure, Success
from account_recovery.domain.errors import (
    InvalidResetTokenError,
    StorageUnavailableError,
)
from account_recovery.schemas.password_reset_schemas import (
    ErrorResponse,
    PasswordResetCreateRequest,
    PasswordResetCreateResponse,
    PasswordResetTokenCreateRequest,
    PasswordResetTokenCreateResponse,
)

password_reset_tokens_router = APIRouter(
    prefix="/password-reset-tokens",
    tags=["Password Reset Tokens"],
)

password_resets_router = APIRouter(
    prefix="/password-resets",
    tags=["Password Resets"],
)


def _error_response(request: Request, error: DomainError) -> JSONResponse:
    match error:
        case InvalidResetTokenError():
            status_code, title = status.HTTP_400_BAD_REQUEST, "Invalid Reset Link"
        case ValidationError():
            status_code, title = (
                status.HTTP_422_UNPROCESSABLE_ENTITY,
                "Validation Failed",
            )
        case StorageUnavailableError():
            status_code, title = (
                status.HTTP_503_SERVICE_UNAVAILABLE,
                "Service Unavailable",
            )
        case _:
            status_code, title = status.HTTP_400_BAD_REQUEST, "Password Reset Failed"

    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            type=error.code.value,
            title=title,
            status=status_code,
            detail=error.message,
            instance=str(request.url.path),
        ).model_dump(),
    )


@password_reset_tokens_router.post(
    "",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=PasswordResetTokenCreateResponse,
    responses={
        202: {
            "description": "Password reset email sent (if account exists)",
            "model": PasswordResetTokenCreateResponse,
        },
        503: {"description": "User lookup unavailable", "model": ErrorResponse},
    },
    summary="Create password reset token",
    description="Request a password reset. Same response whether or not the email exists.",
)
async def create_password_reset_token(
    request: Request,
    data: PasswordResetTokenCreateRequest,
    service: PasswordResetService = Depends(get_password_reset_service),
) -> PasswordResetTokenCreateResponse | JSONResponse:
    """Create password reset token (request reset).

    POST /api/v1/password-reset-tokens → 202 Accepted
    """
    command = RequestPasswordReset(
        email=data.email,
        request_ip=request.client.host if request.client else None,
        request_agent=request.headers.get("user-agent"),
        locale=request.headers.get("accept-language", "").split(",")[0] or None,
    )

    match await service.request_reset(command):
        case Success(value=requested):
            return PasswordResetTokenCreateResponse(message=requested.message)
        case Failure(error=error):
            return _error_response(request, error)


@password_resets_router.post(
    "",
    status_code=status.HTTP_200_OK,
    response_model=PasswordResetCreateResponse,
    responses={
        200: {
            "description": "Password reset successfully",
            "model": PasswordResetCreateResponse,
        },
        400: {"description": "Invalid or expired link", "model": ErrorResponse},
        422: {"description": "Invalid new password"},
        503: {"description": "Storage unavailable", "model": ErrorResponse},
    },
    summary="Create password reset",
    description="Reset password using the token from the emailed link.",
)
async def create_password_reset(
    request: Request,
    data: PasswordResetCreateRequest,
    service: PasswordResetService = Depends(get_password_reset_service),
) -> PasswordResetCreateResponse | JSONResponse:
    """Create password reset (execute reset).

    POST /api/v1/password-resets → 200 OK
    """
    command = ConfirmPasswordReset(
        token=data.token,
        new_password=data.new_password,
    )

    match await service.redeem_reset(command):
        case Success(value=completed):
            return PasswordResetCreateResponse(message=completed.message)
        case Failure(error=error):
            return _error_response(request, error)
