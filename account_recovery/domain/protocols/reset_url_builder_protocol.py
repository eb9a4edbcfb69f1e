"""ResetUrlBuilderProtocol - Port for public links embedded in emails."""

from typing import Protocol


class ResetUrlBuilderProtocol(Protocol):
    """Builds stable, HTTPS-qualified application URLs.

    Implementations:
        - AppUrlBuilder: account_recovery/infrastructure/links/app_url_builder.py
    """

    def build_reset_url(self, raw_token: str) -> str:
        """Build the reset link carrying the raw token as a query parameter.

        Example:
            >>> builder.build_reset_url("abc")
            'https://tickets.example.com/auth/reset-password?token=abc'
        """
        ...

    def build_url(self, path: str, query_params: dict[str, str] | None = None) -> str:
        """Build an absolute application URL for a path and query parameters."""
        ...
