"""
Spotify credentials management.

Provides a clean dataclass for Spotify OAuth credentials so the token
manager never reads configuration on its own.
"""

import os
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class SpotifyCredentials:
    """
    Immutable container for Spotify OAuth credentials.

    Attributes:
        client_id: The Spotify application client ID.
        client_secret: The Spotify application client secret.
        redirect_uri: The OAuth callback URL.
        refresh_token: Optional refresh token obtained by an earlier
            authorization. When present the server can start without
            running the authorization flow again.

    Example:
        credentials = SpotifyCredentials.from_env()

        # Or create directly
        credentials = SpotifyCredentials(
            client_id='your_client_id',
            client_secret='your_client_secret',
            redirect_uri='http://localhost:3000/callback',
            refresh_token='AQD...',
        )
    """

    client_id: str
    client_secret: str
    redirect_uri: str
    refresh_token: Optional[str] = None

    def __post_init__(self):
        """Validate credentials on creation."""
        if not self.client_id:
            raise ValueError("client_id is required")
        if not self.client_secret:
            raise ValueError("client_secret is required")
        if not self.redirect_uri:
            raise ValueError("redirect_uri is required")

    @classmethod
    def from_config(cls, config: Any) -> 'SpotifyCredentials':
        """
        Create credentials from a config class or mapping.

        Args:
            config: A Config class (see spotify_mcp.config) or a dict
                with the same SPOTIFY_* keys.

        Returns:
            SpotifyCredentials instance.

        Raises:
            ValueError: If required config keys are missing.
        """
        if isinstance(config, dict):
            get = config.get
        else:
            def get(key, default=None):
                return getattr(config, key, default)

        return cls(
            client_id=get('SPOTIFY_CLIENT_ID') or '',
            client_secret=get('SPOTIFY_CLIENT_SECRET') or '',
            redirect_uri=get('SPOTIFY_REDIRECT_URI') or '',
            refresh_token=get('SPOTIFY_REFRESH_TOKEN') or None,
        )

    @classmethod
    def from_env(cls) -> 'SpotifyCredentials':
        """
        Create credentials from environment variables.

        Raises:
            ValueError: If required environment variables are missing.
        """
        return cls(
            client_id=os.getenv('SPOTIFY_CLIENT_ID', ''),
            client_secret=os.getenv('SPOTIFY_CLIENT_SECRET', ''),
            redirect_uri=os.getenv('SPOTIFY_REDIRECT_URI', ''),
            refresh_token=os.getenv('SPOTIFY_REFRESH_TOKEN') or None,
        )

    def __repr__(self) -> str:
        return (
            f"SpotifyCredentials(client_id={self.client_id!r}, "
            f"redirect_uri={self.redirect_uri!r}, "
            f"has_refresh_token={bool(self.refresh_token)})"
        )
