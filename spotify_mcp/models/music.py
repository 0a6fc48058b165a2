from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field
import logging

logger = logging.getLogger(__name__)


def _join_artists(data: Dict[str, Any]) -> str:
    return ", ".join(
        artist.get("name", "Unknown") for artist in data.get("artists") or []
    )


@dataclass
class Track:
    """A Spotify track reduced to what the tools display."""

    track_id: str
    name: str
    artist: str
    album: str
    uri: str
    duration_ms: Optional[int] = None

    @classmethod
    def from_spotify(cls, data: Dict[str, Any]) -> "Track":
        return cls(
            track_id=data.get("id") or "",
            name=data.get("name", "Unknown"),
            artist=_join_artists(data),
            album=(data.get("album") or {}).get("name", "Unknown"),
            uri=data.get("uri", ""),
            duration_ms=data.get("duration_ms"),
        )


@dataclass
class Playlist:
    """Represents a Spotify playlist summary."""

    id: str
    name: str
    tracks_count: int
    uri: str
    description: Optional[str] = None
    owner: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.id:
            logger.error("Playlist ID is required")
            raise ValueError("Playlist ID is required")

    @classmethod
    def from_spotify(cls, data: Dict[str, Any]) -> "Playlist":
        owner = data.get("owner") or {}
        # Newer API responses report the count under "items"
        tracks_meta = data.get("tracks") or data.get("items") or {}
        total = tracks_meta.get("total") if isinstance(tracks_meta, dict) else None
        return cls(
            id=data.get("id", ""),
            name=data.get("name", "Unknown"),
            tracks_count=total or 0,
            uri=data.get("uri", ""),
            description=data.get("description") or None,
            owner=owner.get("display_name") or owner.get("id"),
        )


@dataclass
class Device:
    """A Spotify Connect playback device."""

    id: str
    name: str
    type: str
    is_active: bool
    volume_percent: Optional[int] = None

    @classmethod
    def from_spotify(cls, data: Dict[str, Any]) -> "Device":
        return cls(
            id=data.get("id") or "",
            name=data.get("name", "Unknown"),
            type=data.get("type", "Unknown"),
            is_active=bool(data.get("is_active")),
            volume_percent=data.get("volume_percent"),
        )


@dataclass
class PlaybackState:
    """Current playback as reported by /me/player."""

    is_playing: bool
    track: Optional[Track] = None
    progress_ms: Optional[int] = None
    device: Optional[Device] = None
    shuffle_state: Optional[bool] = None
    repeat_state: Optional[str] = None

    @classmethod
    def from_spotify(cls, data: Optional[Dict[str, Any]]) -> Optional["PlaybackState"]:
        """Build a PlaybackState, or None when nothing is playing."""
        if not data or not data.get("item"):
            return None
        device = data.get("device")
        return cls(
            is_playing=bool(data.get("is_playing")),
            track=Track.from_spotify(data["item"]),
            progress_ms=data.get("progress_ms"),
            device=Device.from_spotify(device) if device else None,
            shuffle_state=data.get("shuffle_state"),
            repeat_state=data.get("repeat_state"),
        )


@dataclass
class SearchResult:
    """Tracks returned by a search, with the total match count."""

    tracks: List[Track] = field(default_factory=list)
    total: int = 0

    @classmethod
    def from_spotify(cls, data: Dict[str, Any]) -> "SearchResult":
        tracks_data = (data or {}).get("tracks") or {}
        items = tracks_data.get("items") or []
        return cls(
            tracks=[Track.from_spotify(item) for item in items if item],
            total=tracks_data.get("total", len(items)),
        )
