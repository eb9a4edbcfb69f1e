"""Public link builders."""

from account_recovery.infrastructure.links.app_url_builder import AppUrlBuilder

__all__ = ["AppUrlBuilder"]
