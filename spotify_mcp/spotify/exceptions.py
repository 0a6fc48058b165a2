"""
Spotify module exceptions.

Provides a clean exception hierarchy for token management and
Spotify API operations.
"""

from typing import Optional


class SpotifyError(Exception):
    """Base exception for all Spotify-related errors."""
    pass


class SpotifyAuthError(SpotifyError):
    """Raised when authentication/authorization fails."""
    pass


class SpotifyTokenError(SpotifyAuthError):
    """Raised when token operations fail."""
    pass


class SpotifyNoRefreshTokenError(SpotifyTokenError):
    """Raised when a refresh is attempted before any refresh token was obtained."""
    pass


class SpotifyNoAccessTokenError(SpotifyTokenError):
    """Raised when no access token is held after a freshness check."""
    pass


class SpotifyAuthExchangeError(SpotifyTokenError):
    """Raised when Spotify rejects an authorization code exchange."""
    pass


class SpotifyRefreshFailedError(SpotifyTokenError):
    """Raised when Spotify rejects the refresh token (revoked or expired)."""
    pass


class SpotifyAPIError(SpotifyError):
    """
    Raised when a Spotify API call fails terminally.

    The message is a short sentence suitable for display. The original
    status code and underlying exception are kept for diagnostics.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
        remote_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.cause = cause
        self.remote_message = remote_message


class SpotifyUnauthorizedError(SpotifyAPIError):
    """Raised when Spotify keeps rejecting the access token."""
    pass


class SpotifyForbiddenError(SpotifyAPIError):
    """Raised when the account lacks permission for an operation."""
    pass


class SpotifyNotFoundError(SpotifyAPIError):
    """Raised when a requested resource is not found."""
    pass


class SpotifyRateLimitError(SpotifyAPIError):
    """Raised when rate limited by Spotify API."""

    def __init__(self, message: str, retry_after: Optional[float] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class SpotifyServiceUnavailableError(SpotifyAPIError):
    """Raised when Spotify reports a server-side failure."""
    pass
