"""
Spotify API data operations.

Async wrappers around spotipy for the operations exposed as MCP tools:
search, playback, queue, playlists and devices. Every call goes through
SpotifyCallExecutor, so it runs with a fresh token and bounded retry.
spotipy itself is blocking, so each request runs in a worker thread.
"""

import asyncio
import logging
from typing import Any, Callable, List, Optional, TypeVar

import requests
import spotipy

from spotify_mcp.models import Device, PlaybackState, Playlist, SearchResult, Track

from .auth import SpotifyTokenManager
from .error_handling import RetryPolicy
from .executor import SpotifyCallExecutor

logger = logging.getLogger(__name__)

# Silence spotipy's verbose logging
logging.getLogger("spotipy").setLevel(logging.WARNING)

T = TypeVar("T")

REQUEST_TIMEOUT = 30  # seconds


class SpotifyAPI:
    """
    Spotify Web API client for the MCP tools.

    Example:
        tokens = SpotifyTokenManager(SpotifyCredentials.from_env())
        api = SpotifyAPI(tokens)
        result = await api.search_tracks("bohemian rhapsody", limit=5)
    """

    def __init__(
        self,
        token_manager: SpotifyTokenManager,
        executor: Optional[SpotifyCallExecutor] = None,
        retry_policy: Optional[RetryPolicy] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the API client.

        Args:
            token_manager: Source of fresh access tokens.
            executor: Optional executor. Built from the token manager and
                retry_policy when not given.
            retry_policy: Retry bounds for the default executor.
            session: Optional requests session shared by all calls. A
                plain session carries no retry adapter, so spotipy never
                retries on its own.
        """
        self._tokens = token_manager
        self._executor = executor or SpotifyCallExecutor(
            token_manager, policy=retry_policy
        )
        self._session = session or requests.Session()
        # One client for the lifetime of the API; spotipy closes its
        # session when a client is garbage-collected.
        self._sp = spotipy.Spotify(
            auth=token_manager.access_token,
            requests_session=self._session,
            requests_timeout=REQUEST_TIMEOUT,
        )

    @property
    def token_manager(self) -> SpotifyTokenManager:
        return self._tokens

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    # -----------------------------------------------------------------
    # Search
    # -----------------------------------------------------------------

    async def search_tracks(self, query: str, limit: int = 10) -> SearchResult:
        """
        Search for tracks.

        Args:
            query: Search query string.
            limit: Maximum number of results to return (1-50).
        """
        data = await self._call(
            "search tracks",
            lambda sp: sp.search(q=query, limit=limit, type="track"),
        )
        return SearchResult.from_spotify(data)

    # -----------------------------------------------------------------
    # Playback
    # -----------------------------------------------------------------

    async def play_track(self, track_uri: str, device_id: Optional[str] = None) -> None:
        """Start playing a single track, optionally on a given device."""
        await self._call(
            "play track",
            lambda sp: sp.start_playback(device_id=device_id, uris=[track_uri]),
        )

    async def control_playback(self, action: str, device_id: Optional[str] = None) -> None:
        """
        Resume, pause, or skip playback.

        Args:
            action: One of "play", "pause", "next", "previous".
            device_id: Optional device to control.

        Raises:
            ValueError: If the action is not supported.
        """
        requests_by_action = {
            "play": lambda sp: sp.start_playback(device_id=device_id),
            "pause": lambda sp: sp.pause_playback(device_id=device_id),
            "next": lambda sp: sp.next_track(device_id=device_id),
            "previous": lambda sp: sp.previous_track(device_id=device_id),
        }
        if action not in requests_by_action:
            raise ValueError(f"Invalid playback action: {action}")

        await self._call(f"{action} playback", requests_by_action[action])

    async def get_current_playback(self) -> Optional[PlaybackState]:
        """Get the current playback state, or None if nothing is playing."""
        data = await self._call(
            "get current playback",
            lambda sp: sp.current_playback(),
        )
        return PlaybackState.from_spotify(data)

    async def add_to_queue(self, track_uri: str, device_id: Optional[str] = None) -> None:
        """Add a track to the end of the playback queue."""
        await self._call(
            "add to queue",
            lambda sp: sp.add_to_queue(track_uri, device_id=device_id),
        )

    # -----------------------------------------------------------------
    # Playlists
    # -----------------------------------------------------------------

    async def get_user_playlists(self, limit: int = 20) -> List[Playlist]:
        """Get the current user's playlists (1-50)."""
        data = await self._call(
            "get user playlists",
            lambda sp: sp.current_user_playlists(limit=limit),
        )
        return [
            Playlist.from_spotify(item)
            for item in (data or {}).get("items") or []
            if item and item.get("id")
        ]

    async def get_playlist_tracks(self, playlist_id: str, limit: int = 50) -> List[Track]:
        """
        Get tracks from a playlist (1-100).

        Entries without a track (removed or unavailable) are skipped.
        """
        data = await self._call(
            "get playlist tracks",
            lambda sp: sp.playlist_items(
                playlist_id, limit=limit, additional_types=("track",),
            ),
        )
        tracks = []
        for item in (data or {}).get("items") or []:
            track = (item or {}).get("track")
            if track:
                tracks.append(Track.from_spotify(track))
        return tracks

    # -----------------------------------------------------------------
    # Devices
    # -----------------------------------------------------------------

    async def get_available_devices(self) -> List[Device]:
        """Get all available Spotify Connect devices."""
        data = await self._call(
            "get available devices",
            lambda sp: sp.devices(),
        )
        return [Device.from_spotify(d) for d in (data or {}).get("devices") or []]

    # -----------------------------------------------------------------
    # Internal request handling
    # -----------------------------------------------------------------

    async def _call(self, label: str, request: Callable[[spotipy.Spotify], T]) -> T:
        """
        Run one spotipy request through the executor.

        The access token is bound inside the operation so a retry after
        a token refresh picks up the new one.
        """
        async def operation() -> Any:
            self._sp.set_auth(self._tokens.access_token)
            return await asyncio.to_thread(request, self._sp)

        return await self._executor.run(operation, label)
