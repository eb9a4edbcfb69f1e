"""Application URL builder for links embedded in emails."""

from urllib.parse import urlencode, urlsplit


class AppUrlBuilder:
    """Implements ResetUrlBuilderProtocol.

    Args:
        base_url: Public origin, must be https (e.g. https://tickets.example.com).
        reset_path: Path of the page that accepts a reset token.

    Raises:
        ValueError: If base_url is not an absolute https URL.
    """

    def __init__(self, base_url: str, reset_path: str = "/auth/reset-password") -> None:
        parts = urlsplit(base_url)
        if parts.scheme != "https" or not parts.netloc:
            msg = "Base URL must be an absolute https:// URL"
            raise ValueError(msg)

        self._base_url = base_url.rstrip("/")
        self._reset_path = reset_path

    def build_reset_url(self, raw_token: str) -> str:
        return self.build_url(self._reset_path, {"token": raw_token})

    def build_url(self, path: str, query_params: dict[str, str] | None = None) -> str:
        """Join base URL and path, then append URL-encoded query parameters.

        Example:
            >>> AppUrlBuilder("https://x.example").build_url("/a", {"q": "1 2"})
            'https://x.example/a?q=1+2'
        """
        url = f"{self._base_url}/{path.lstrip('/')}"
        if query_params:
            url = f"{url}?{urlencode(query_params)}"
        return url
