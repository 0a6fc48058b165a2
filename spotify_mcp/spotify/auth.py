"""
Spotify authentication and token management.

Handles the OAuth authorization URL, code exchange, token refresh and
freshness checks for a single Spotify account. The token manager owns
the credential; every other component asks it for a fresh access token
instead of holding one.
"""

import asyncio
import dataclasses
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urlencode

import requests

from .credentials import SpotifyCredentials
from .exceptions import (
    SpotifyAuthExchangeError,
    SpotifyNoAccessTokenError,
    SpotifyNoRefreshTokenError,
    SpotifyRefreshFailedError,
    SpotifyTokenError,
)

logger = logging.getLogger(__name__)


# Scopes required by the MCP tool surface
DEFAULT_SCOPES = [
    "user-read-playback-state",
    "user-modify-playback-state",
    "user-read-currently-playing",
    "playlist-read-private",
    "playlist-read-collaborative",
    "user-library-read",
]

# Tokens this close to expiry are treated as expired, so a token never
# runs out in the middle of a request.
SAFETY_BUFFER_SECONDS = 60

DEFAULT_EXPIRES_IN = 3600  # seconds
TOKEN_REQUEST_TIMEOUT = 30  # seconds


@dataclass
class TokenInfo:
    """
    Structured container for OAuth token information.

    ``expires_at`` is an absolute wall-clock timestamp in seconds.
    """

    access_token: str
    refresh_token: Optional[str]
    expires_at: float
    token_type: str = "Bearer"
    scope: Optional[str] = None

    @classmethod
    def from_response(
        cls,
        data: Dict[str, Any],
        now: float,
        previous: Optional["TokenInfo"] = None,
        default_scope: Optional[str] = None,
    ) -> "TokenInfo":
        """
        Create TokenInfo from a token endpoint response.

        Args:
            data: JSON body returned by the token endpoint.
            now: Current wall-clock time, used to compute expires_at.
            previous: Credential being replaced. Its refresh token and
                scope are kept when the response omits them.
            default_scope: Scope recorded when neither the response nor
                the previous credential carries one.

        Raises:
            SpotifyTokenError: If the response has no access token.
        """
        if not isinstance(data, dict):
            raise SpotifyTokenError(
                f"Token data must be a dictionary, got {type(data)}"
            )
        if not data.get("access_token"):
            raise SpotifyTokenError("Token response missing access_token")

        refresh_token = data.get("refresh_token")
        scope = data.get("scope")
        if previous is not None:
            refresh_token = refresh_token or previous.refresh_token
            scope = scope or previous.scope

        expires_in = data.get("expires_in")
        if expires_in is None:
            expires_in = DEFAULT_EXPIRES_IN
        return cls(
            access_token=data["access_token"],
            refresh_token=refresh_token,
            expires_at=now + float(expires_in),
            token_type=data.get("token_type", "Bearer"),
            scope=scope or default_scope,
        )

    def expires_within(self, seconds: float, now: float) -> bool:
        """Check whether the token expires within ``seconds`` of ``now``."""
        return now >= self.expires_at - seconds


class SpotifyTokenManager:
    """
    Keeps one Spotify OAuth credential valid.

    The manager never retries on its own; retry policy belongs to
    SpotifyCallExecutor. Concurrent callers share the credential, and
    concurrent refreshes are collapsed into a single request.

    Example:
        credentials = SpotifyCredentials.from_env()
        tokens = SpotifyTokenManager(credentials)

        # One-time authorization
        url = tokens.get_auth_url(state="xyz")
        token_info = await tokens.exchange_code(code)

        # Before every API call
        access_token = await tokens.ensure_fresh()
    """

    # Spotify OAuth endpoints
    _AUTHORIZE_URL = "https://accounts.spotify.com/authorize"
    _TOKEN_URL = "https://accounts.spotify.com/api/token"

    def __init__(
        self,
        credentials: SpotifyCredentials,
        scopes: Optional[List[str]] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the token manager.

        Args:
            credentials: SpotifyCredentials instance. If it carries a
                refresh token, the manager starts seeded with it and the
                first freshness check triggers a refresh.
            scopes: Optional list of OAuth scopes. Defaults to DEFAULT_SCOPES.
            clock: Returns the current wall-clock time in seconds.
        """
        self._credentials = credentials
        self._scopes = scopes or DEFAULT_SCOPES
        self._scope_string = " ".join(self._scopes)
        self._clock = clock
        self._token: Optional[TokenInfo] = None
        self._refresh_task: Optional[asyncio.Future] = None

        if credentials.refresh_token:
            self._token = TokenInfo(
                access_token="",
                refresh_token=credentials.refresh_token,
                expires_at=0,
            )

    @property
    def token_info(self) -> Optional[TokenInfo]:
        """A copy of the held credential, or None before authorization."""
        if self._token is None:
            return None
        return dataclasses.replace(self._token)

    @property
    def access_token(self) -> Optional[str]:
        """The held access token, without any freshness check."""
        if self._token is None or not self._token.access_token:
            return None
        return self._token.access_token

    @property
    def has_refresh_token(self) -> bool:
        return bool(self._token and self._token.refresh_token)

    # -----------------------------------------------------------------
    # OAuth flow
    # -----------------------------------------------------------------

    def get_auth_url(self, state: Optional[str] = None) -> str:
        """
        Generate the Spotify authorization URL.

        Args:
            state: Optional state parameter for CSRF protection.

        Returns:
            The authorization URL the user must open in a browser.
        """
        params = {
            "client_id": self._credentials.client_id,
            "response_type": "code",
            "redirect_uri": self._credentials.redirect_uri,
            "scope": self._scope_string,
        }
        if state:
            params["state"] = state

        url = f"{self._AUTHORIZE_URL}?{urlencode(params)}"
        logger.debug(f"Generated auth URL: {url[:50]}...")
        return url

    async def exchange_code(self, code: str) -> TokenInfo:
        """
        Exchange an authorization code for tokens.

        Replaces the held credential entirely on success.

        Args:
            code: The authorization code from the OAuth callback.

        Returns:
            TokenInfo with access and refresh tokens.

        Raises:
            SpotifyAuthExchangeError: If the code is missing or rejected,
                or the response is unusable.
        """
        if not code:
            raise SpotifyAuthExchangeError("Authorization code is required")

        try:
            response = await self._request_token({
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": self._credentials.redirect_uri,
            })
        except requests.RequestException as e:
            logger.error(f"Token exchange failed: {e}", exc_info=True)
            raise SpotifyAuthExchangeError(
                f"Failed to exchange authorization code for token: {e}"
            ) from e

        if response.status_code != 200:
            error_msg = _error_description(response)
            raise SpotifyAuthExchangeError(
                f"Failed to exchange authorization code for token: {error_msg}"
            )

        try:
            token_info = TokenInfo.from_response(
                response.json(),
                now=self._clock(),
                default_scope=self._scope_string,
            )
        except (SpotifyTokenError, ValueError) as e:
            raise SpotifyAuthExchangeError(
                f"Failed to exchange authorization code for token: {e}"
            ) from e

        if not token_info.refresh_token:
            raise SpotifyAuthExchangeError(
                "Failed to exchange authorization code for token: "
                "no refresh_token returned"
            )

        self._token = token_info
        logger.info("Successfully exchanged code for token")
        return token_info

    async def refresh(self) -> TokenInfo:
        """
        Obtain a new access token using the held refresh token.

        At most one refresh request is in flight at a time; callers that
        arrive while one is running await its outcome.

        Returns:
            The new TokenInfo.

        Raises:
            SpotifyNoRefreshTokenError: If no refresh token is held.
            SpotifyRefreshFailedError: If Spotify rejects the refresh.
        """
        if not self.has_refresh_token:
            raise SpotifyNoRefreshTokenError(
                "No refresh token available. "
                "Please authorize the application first."
            )

        if self._refresh_task is None or self._refresh_task.done():
            self._refresh_task = asyncio.ensure_future(self._refresh())
            self._refresh_task.add_done_callback(self._clear_refresh_task)
        else:
            logger.debug("Refresh already in flight, awaiting it")

        return await asyncio.shield(self._refresh_task)

    def is_expired(self) -> bool:
        """
        Check whether the access token must be refreshed before use.

        True when no access token is held, or when it expires within
        SAFETY_BUFFER_SECONDS.
        """
        if self._token is None or not self._token.access_token:
            return True
        return self._token.expires_within(SAFETY_BUFFER_SECONDS, self._clock())

    async def ensure_fresh(self) -> str:
        """
        Return a valid access token, refreshing first if necessary.

        Raises:
            SpotifyNoRefreshTokenError: If a refresh is needed but no
                refresh token is held.
            SpotifyRefreshFailedError: If the refresh is rejected.
            SpotifyNoAccessTokenError: If no access token is held after
                the check.
        """
        if self.is_expired():
            logger.info("Access token expired or missing, refreshing")
            await self.refresh()

        if self._token is None or not self._token.access_token:
            raise SpotifyNoAccessTokenError(
                "No access token available. "
                "Please authorize the application first."
            )
        return self._token.access_token

    # -----------------------------------------------------------------
    # Internals
    # -----------------------------------------------------------------

    async def _refresh(self) -> TokenInfo:
        previous = self._token
        try:
            response = await self._request_token({
                "grant_type": "refresh_token",
                "refresh_token": previous.refresh_token,
            })
        except requests.RequestException as e:
            logger.error(f"Token refresh failed: {e}", exc_info=True)
            raise SpotifyRefreshFailedError(
                f"Failed to refresh access token: {e}"
            ) from e

        if response.status_code != 200:
            error_msg = _error_description(response)
            logger.error(f"Token refresh rejected: {error_msg}")
            raise SpotifyRefreshFailedError(
                f"Failed to refresh access token: {error_msg}"
            )

        try:
            token_info = TokenInfo.from_response(
                response.json(),
                now=self._clock(),
                previous=previous,
                default_scope=self._scope_string,
            )
        except (SpotifyTokenError, ValueError) as e:
            raise SpotifyRefreshFailedError(
                f"Failed to refresh access token: {e}"
            ) from e

        if self._token is not previous:
            # An exchange replaced the credential while this refresh ran
            logger.info("Credential replaced during refresh, keeping the newer one")
            return dataclasses.replace(self._token)

        self._token = token_info
        logger.info("Successfully refreshed token")
        return token_info

    def _clear_refresh_task(self, task: asyncio.Future) -> None:
        if self._refresh_task is task:
            self._refresh_task = None
        # Mark the outcome as retrieved when every waiter was cancelled
        if not task.cancelled():
            task.exception()

    async def _request_token(self, data: Dict[str, str]) -> requests.Response:
        return await asyncio.to_thread(
            requests.post,
            self._TOKEN_URL,
            data=data,
            auth=(
                self._credentials.client_id,
                self._credentials.client_secret,
            ),
            timeout=TOKEN_REQUEST_TIMEOUT,
        )


def _error_description(response: requests.Response) -> str:
    """Pull the most useful error text out of a token endpoint response."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        return (
            body.get("error_description")
            or body.get("error")
            or response.text
            or f"HTTP {response.status_code}"
        )
    return response.text or f"HTTP {response.status_code}"
