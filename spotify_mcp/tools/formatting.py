"""Shared text formatting for tool responses."""

from typing import Optional

from spotify_mcp.models import Track


def format_duration(ms: Optional[int]) -> str:
    """Format milliseconds as M:SS, or "Unknown" when missing."""
    if not ms:
        return "Unknown"
    total_seconds = ms // 1000
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes}:{seconds:02d}"


def format_track_entry(index: int, track: Track) -> str:
    """Format one numbered track block for a list response."""
    return (
        f"{index}. {track.name}\n"
        f"   Artist: {track.artist}\n"
        f"   Album: {track.album}\n"
        f"   Duration: {format_duration(track.duration_ms)}\n"
        f"   URI: {track.uri}\n\n"
    )
