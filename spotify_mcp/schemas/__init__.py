"""
Pydantic schemas for tool argument validation.
"""

from pydantic import ValidationError

from .requests import (
    ToolRequest,
    SearchTracksRequest,
    PlayTrackRequest,
    AddToQueueRequest,
    PlaybackControlRequest,
    UserPlaylistsRequest,
    PlaylistTracksRequest,
    TRACK_URI_PREFIX,
)

__all__ = [
    # Exceptions
    "ValidationError",
    # Request schemas
    "ToolRequest",
    "SearchTracksRequest",
    "PlayTrackRequest",
    "AddToQueueRequest",
    "PlaybackControlRequest",
    "UserPlaylistsRequest",
    "PlaylistTracksRequest",
    "TRACK_URI_PREFIX",
]
