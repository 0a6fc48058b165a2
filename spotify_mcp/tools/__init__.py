"""
MCP tool handlers.

Each handler validates its arguments, calls SpotifyAPI, and renders the
result as plain text for the agent.
"""

from .search import search_tracks
from .playback import (
    play_track,
    playback_control,
    get_current_playback,
    add_to_queue,
)
from .playlist import get_user_playlists, get_playlist_tracks
from .device import get_available_devices

__all__ = [
    "search_tracks",
    "play_track",
    "playback_control",
    "get_current_playback",
    "add_to_queue",
    "get_user_playlists",
    "get_playlist_tracks",
    "get_available_devices",
]
