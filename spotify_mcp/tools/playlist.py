"""
Playlist tools.

MCP tools for reading Spotify playlists.
"""

from spotify_mcp.schemas import PlaylistTracksRequest, UserPlaylistsRequest
from spotify_mcp.spotify import SpotifyAPI

from .formatting import format_track_entry


async def get_user_playlists(api: SpotifyAPI, limit: int = 20) -> str:
    """List the user's playlists with track counts and IDs."""
    request = UserPlaylistsRequest(limit=limit)
    playlists = await api.get_user_playlists(request.limit)

    if not playlists:
        return "No playlists found. Create some playlists in Spotify!"

    response = f"Found {len(playlists)} playlist(s):\n\n"
    for index, playlist in enumerate(playlists, start=1):
        response += f"{index}. {playlist.name}\n"
        response += f"   Tracks: {playlist.tracks_count}\n"
        if playlist.description:
            response += f"   Description: {playlist.description}\n"
        if playlist.owner:
            response += f"   Owner: {playlist.owner}\n"
        response += f"   ID: {playlist.id}\n"
        response += f"   URI: {playlist.uri}\n\n"
    return response


async def get_playlist_tracks(
    api: SpotifyAPI, playlist_id: str, limit: int = 50
) -> str:
    """List the tracks of one playlist."""
    request = PlaylistTracksRequest(playlist_id=playlist_id, limit=limit)
    tracks = await api.get_playlist_tracks(request.playlist_id, request.limit)

    if not tracks:
        return f"No tracks found in playlist {request.playlist_id}"

    response = f"Playlist tracks (showing {len(tracks)}):\n\n"
    for index, track in enumerate(tracks, start=1):
        response += format_track_entry(index, track)
    return response
