"""
Playback control tools.

MCP tools for controlling Spotify playback.
"""

from typing import Optional

from spotify_mcp.schemas import (
    AddToQueueRequest,
    PlaybackControlRequest,
    PlayTrackRequest,
)
from spotify_mcp.spotify import SpotifyAPI

from .formatting import format_duration

ACTION_MESSAGES = {
    "play": "Resumed playback",
    "pause": "Paused playback",
    "next": "Skipped to next track",
    "previous": "Skipped to previous track",
}


async def play_track(
    api: SpotifyAPI, track_uri: str, device_id: Optional[str] = None
) -> str:
    """Play a specific track, optionally on a given device."""
    request = PlayTrackRequest(track_uri=track_uri, device_id=device_id)
    await api.play_track(request.track_uri, request.device_id)

    if request.device_id:
        return f"Successfully started playing track on device {request.device_id}"
    return "Successfully started playing track"


async def playback_control(
    api: SpotifyAPI, action: str, device_id: Optional[str] = None
) -> str:
    """Resume, pause, or skip playback."""
    request = PlaybackControlRequest(action=action, device_id=device_id)
    await api.control_playback(request.action, request.device_id)
    return ACTION_MESSAGES[request.action]


async def get_current_playback(api: SpotifyAPI) -> str:
    """Describe what is playing right now."""
    state = await api.get_current_playback()

    if not state or not state.track:
        return "No active playback. Please start playing something on Spotify."

    track = state.track
    response = "Current Playback:\n\n"
    response += f"Status: {'Playing' if state.is_playing else 'Paused'}\n\n"
    response += f"Track: {track.name}\n"
    response += f"Artist: {track.artist}\n"
    response += f"Album: {track.album}\n"
    response += (
        f"Progress: {format_duration(state.progress_ms)} / "
        f"{format_duration(track.duration_ms)}\n"
    )
    response += f"URI: {track.uri}\n\n"

    if state.device:
        response += f"Device: {state.device.name} ({state.device.type})\n"
        if state.device.volume_percent is not None:
            response += f"Volume: {state.device.volume_percent}%\n"

    if state.shuffle_state is not None:
        response += f"Shuffle: {'On' if state.shuffle_state else 'Off'}\n"

    if state.repeat_state:
        response += f"Repeat: {state.repeat_state}\n"

    return response


async def add_to_queue(
    api: SpotifyAPI, track_uri: str, device_id: Optional[str] = None
) -> str:
    """Add a track to the playback queue."""
    request = AddToQueueRequest(track_uri=track_uri, device_id=device_id)
    await api.add_to_queue(request.track_uri, request.device_id)
    return "Successfully added track to queue"
