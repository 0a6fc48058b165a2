"""
Spotify API integration module.

This module provides the authenticated-call core used by the MCP tools:
a token manager that keeps one OAuth credential fresh, and a call
executor that wraps remote operations with re-authentication and
bounded retry.

Architecture:
    - credentials.py: SpotifyCredentials for config/DI
    - auth.py: SpotifyTokenManager for OAuth and token lifecycle
    - error_handling.py: RetryPolicy, failure classification, messages
    - executor.py: SpotifyCallExecutor retry loop
    - api.py: SpotifyAPI data operations (spotipy)
    - exceptions.py: Exception hierarchy

Usage:
    from spotify_mcp.spotify import (
        SpotifyCredentials,
        SpotifyTokenManager,
        SpotifyAPI,
    )

    credentials = SpotifyCredentials.from_env()
    tokens = SpotifyTokenManager(credentials)

    # Get auth URL for the one-time OAuth flow
    auth_url = tokens.get_auth_url()

    # After callback, exchange code for token
    token_info = await tokens.exchange_code(code)

    api = SpotifyAPI(tokens)
    result = await api.search_tracks("bohemian rhapsody")
"""

# Credentials (for dependency injection)
from .credentials import SpotifyCredentials

# Auth (token management)
from .auth import (
    SpotifyTokenManager,
    TokenInfo,
    DEFAULT_SCOPES,
    SAFETY_BUFFER_SECONDS,
)

# Retry policy and classification
from .error_handling import (
    RetryPolicy,
    DEFAULT_RETRY_POLICY,
    FailureKind,
    ClassifiedFailure,
    classify_failure,
)

# Executor (retry loop)
from .executor import SpotifyCallExecutor

# API (data operations)
from .api import SpotifyAPI

# Exceptions
from .exceptions import (
    SpotifyError,
    SpotifyAuthError,
    SpotifyTokenError,
    SpotifyNoRefreshTokenError,
    SpotifyNoAccessTokenError,
    SpotifyAuthExchangeError,
    SpotifyRefreshFailedError,
    SpotifyAPIError,
    SpotifyUnauthorizedError,
    SpotifyForbiddenError,
    SpotifyNotFoundError,
    SpotifyRateLimitError,
    SpotifyServiceUnavailableError,
)


__all__ = [
    # Credentials
    'SpotifyCredentials',

    # Auth
    'SpotifyTokenManager',
    'TokenInfo',
    'DEFAULT_SCOPES',
    'SAFETY_BUFFER_SECONDS',

    # Retry
    'RetryPolicy',
    'DEFAULT_RETRY_POLICY',
    'FailureKind',
    'ClassifiedFailure',
    'classify_failure',
    'SpotifyCallExecutor',

    # API
    'SpotifyAPI',

    # Exceptions
    'SpotifyError',
    'SpotifyAuthError',
    'SpotifyTokenError',
    'SpotifyNoRefreshTokenError',
    'SpotifyNoAccessTokenError',
    'SpotifyAuthExchangeError',
    'SpotifyRefreshFailedError',
    'SpotifyAPIError',
    'SpotifyUnauthorizedError',
    'SpotifyForbiddenError',
    'SpotifyNotFoundError',
    'SpotifyRateLimitError',
    'SpotifyServiceUnavailableError',
]
