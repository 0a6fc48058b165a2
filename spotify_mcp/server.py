"""
MCP server wiring.

Registers the Spotify tools on a FastMCP server. Tool handlers live in
spotify_mcp.tools; this module only binds them to a SpotifyAPI instance
and describes them to the agent.
"""

import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from spotify_mcp import tools
from spotify_mcp.error_handlers import tool_error_handler
from spotify_mcp.spotify import SpotifyAPI

logger = logging.getLogger(__name__)

SERVER_NAME = "spotify-mcp-server"

TOOL_NAMES = [
    "search_tracks",
    "play_track",
    "playback_control",
    "get_current_playback",
    "get_user_playlists",
    "get_playlist_tracks",
    "add_to_queue",
    "get_available_devices",
]


def create_server(api: SpotifyAPI) -> FastMCP:
    """
    Create the MCP server with all Spotify tools registered.

    Args:
        api: Spotify API client shared by every tool call.

    Returns:
        A FastMCP server ready to ``run()``.
    """
    mcp = FastMCP(SERVER_NAME)

    @mcp.tool(
        name="search_tracks",
        description=(
            "Search for tracks on Spotify. Returns a list of tracks matching "
            "the search query with their details (name, artist, album, URI). "
            "limit: 1-50, default 10."
        ),
    )
    @tool_error_handler
    async def search_tracks(query: str, limit: int = 10) -> str:
        return await tools.search_tracks(api, query, limit)

    @mcp.tool(
        name="play_track",
        description=(
            "Play a specific track on Spotify. Requires a Spotify track URI "
            "in the format spotify:track:xxx. If device_id is not given, "
            "plays on the currently active device."
        ),
    )
    @tool_error_handler
    async def play_track(track_uri: str, device_id: Optional[str] = None) -> str:
        return await tools.play_track(api, track_uri, device_id)

    @mcp.tool(
        name="playback_control",
        description=(
            "Control Spotify playback. Supports play, pause, next track, and "
            "previous track actions. If device_id is not given, controls "
            "the currently active device."
        ),
    )
    @tool_error_handler
    async def playback_control(action: str, device_id: Optional[str] = None) -> str:
        return await tools.playback_control(api, action, device_id)

    @mcp.tool(
        name="get_current_playback",
        description=(
            "Get current playback state including the currently playing "
            "track, progress, device info, shuffle and repeat state."
        ),
    )
    @tool_error_handler
    async def get_current_playback() -> str:
        return await tools.get_current_playback(api)

    @mcp.tool(
        name="get_user_playlists",
        description=(
            "Get the user's Spotify playlists with details including name, "
            "track count, and description. limit: 1-50, default 20."
        ),
    )
    @tool_error_handler
    async def get_user_playlists(limit: int = 20) -> str:
        return await tools.get_user_playlists(api, limit)

    @mcp.tool(
        name="get_playlist_tracks",
        description=(
            "Get tracks from a specific Spotify playlist. Returns track "
            "details including name, artist, album, and URI. "
            "limit: 1-100, default 50."
        ),
    )
    @tool_error_handler
    async def get_playlist_tracks(playlist_id: str, limit: int = 50) -> str:
        return await tools.get_playlist_tracks(api, playlist_id, limit)

    @mcp.tool(
        name="add_to_queue",
        description=(
            "Add a track to the Spotify playback queue. The track will play "
            "after the current track and any other queued tracks."
        ),
    )
    @tool_error_handler
    async def add_to_queue(track_uri: str, device_id: Optional[str] = None) -> str:
        return await tools.add_to_queue(api, track_uri, device_id)

    @mcp.tool(
        name="get_available_devices",
        description=(
            "Get all available Spotify playback devices. Returns device "
            "name, type, ID, and active status."
        ),
    )
    @tool_error_handler
    async def get_available_devices() -> str:
        return await tools.get_available_devices(api)

    logger.debug("Registered %d tools on %s", len(TOOL_NAMES), SERVER_NAME)
    return mcp
