"""
Request validation schemas using Pydantic.

Provides type-safe validation for all MCP tool arguments.
"""

from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


TRACK_URI_PREFIX = "spotify:track:"


def _check_limit(value: int, maximum: int) -> int:
    if value < 1 or value > maximum:
        raise ValueError(f"Limit must be between 1 and {maximum}")
    return value


class ToolRequest(BaseModel):
    """Base schema for tool arguments."""

    model_config = ConfigDict(extra="ignore")


class DeviceTargetedRequest(ToolRequest):
    """Arguments that may target a specific playback device."""

    device_id: Optional[str] = Field(
        default=None, description="Device to act on; defaults to the active one"
    )

    @field_validator("device_id")
    @classmethod
    def blank_device_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v.strip() if v else v


class SearchTracksRequest(ToolRequest):
    """Arguments for search_tracks."""

    query: str
    limit: int = 10

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Search query cannot be empty")
        return v.strip()

    @field_validator("limit")
    @classmethod
    def validate_limit(cls, v: int) -> int:
        return _check_limit(v, 50)


class TrackUriRequest(DeviceTargetedRequest):
    """Arguments naming a single track by URI."""

    track_uri: str

    @field_validator("track_uri")
    @classmethod
    def validate_track_uri(cls, v: str) -> str:
        v = (v or "").strip()
        if not v.startswith(TRACK_URI_PREFIX) or len(v) == len(TRACK_URI_PREFIX):
            raise ValueError(
                "Invalid track URI. Must be in format: spotify:track:xxx"
            )
        return v


class PlayTrackRequest(TrackUriRequest):
    """Arguments for play_track."""
    pass


class AddToQueueRequest(TrackUriRequest):
    """Arguments for add_to_queue."""
    pass


class PlaybackControlRequest(DeviceTargetedRequest):
    """Arguments for playback_control."""

    action: Literal["play", "pause", "next", "previous"]


class UserPlaylistsRequest(ToolRequest):
    """Arguments for get_user_playlists."""

    limit: int = 20

    @field_validator("limit")
    @classmethod
    def validate_limit(cls, v: int) -> int:
        return _check_limit(v, 50)


class PlaylistTracksRequest(ToolRequest):
    """Arguments for get_playlist_tracks."""

    playlist_id: str
    limit: int = 50

    @field_validator("playlist_id")
    @classmethod
    def validate_playlist_id(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Playlist ID cannot be empty")
        return v.strip()

    @field_validator("limit")
    @classmethod
    def validate_limit(cls, v: int) -> int:
        return _check_limit(v, 100)
