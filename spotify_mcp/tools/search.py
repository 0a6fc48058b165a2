"""
Search tools.

MCP tools for searching Spotify content.
"""

from spotify_mcp.schemas import SearchTracksRequest
from spotify_mcp.spotify import SpotifyAPI

from .formatting import format_track_entry


async def search_tracks(api: SpotifyAPI, query: str, limit: int = 10) -> str:
    """
    Search for tracks on Spotify.

    Args:
        api: Spotify API client.
        query: Search query string.
        limit: Maximum number of results (1-50).

    Returns:
        Numbered list of matching tracks.

    Raises:
        ValidationError: If the query is empty or the limit out of range.
    """
    request = SearchTracksRequest(query=query, limit=limit)
    result = await api.search_tracks(request.query, request.limit)

    if not result.tracks:
        return f'No tracks found for query: "{request.query}"'

    response = f"Found {result.total} tracks (showing {len(result.tracks)}):\n\n"
    for index, track in enumerate(result.tracks, start=1):
        response += format_track_entry(index, track)
    return response
