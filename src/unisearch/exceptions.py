"""Search exceptions — Error kinds surfaced by capability checks and fallbacks.

Every error raised by unisearch derives from ``SearchError`` so callers can
catch the whole family with a single ``except`` clause. Provider adapters map
their transport failures onto the same hierarchy with ``error_for_status``.
"""

from __future__ import annotations


class SearchError(Exception):
    """Base exception for search errors."""


class UnsupportedFeatureError(SearchError):
    """Raised when a feature cannot be served and degrading it is not allowed.

    Args:
        feature: Name of the feature that was refused (e.g. ``"faceted_search"``).
        message: Optional human-readable explanation.
    """

    def __init__(self, feature: str, message: str | None = None) -> None:
        self.feature = feature
        super().__init__(message or f"Unsupported operation: {feature}")


class InternalError(SearchError):
    """Raised when a client-side computation fails (e.g. JSON serialisation)."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        self.original_error = original_error
        super().__init__(f"Internal error: {message}")


class InvalidQueryError(SearchError):
    """Raised when a query or configuration value is malformed."""


class IndexNotFoundError(SearchError):
    """Raised when the target index does not exist."""


class SearchTimeoutError(SearchError):
    """Raised when a provider operation times out."""


class RateLimitedError(SearchError):
    """Raised when a provider rejects a request because of rate limiting."""


def error_for_status(status: int, message: str = "") -> SearchError:
    """Map a provider's HTTP error status onto the exception hierarchy.

    Args:
        status: HTTP status code returned by the provider.
        message: Response body or reason phrase, used in the error text.

    Returns:
        The exception to raise; the caller decides whether to retry.
    """
    if status == 400:
        return InvalidQueryError(f"HTTP 400: {message}" if message else "HTTP 400")
    if status == 404:
        return IndexNotFoundError(message or "HTTP 404")
    if status in (408, 504):
        return SearchTimeoutError("Operation timed out")
    if status == 429:
        return RateLimitedError("Rate limited")
    return InternalError(f"HTTP {status}: {message}" if message else f"HTTP {status}")
