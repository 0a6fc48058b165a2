"""
Tests for the playlist tools.
"""

import pytest
from pydantic import ValidationError
from unittest.mock import AsyncMock, MagicMock

from spotify_mcp.models import Playlist, Track
from spotify_mcp.tools import get_playlist_tracks, get_user_playlists


@pytest.fixture
def api():
    api = MagicMock()
    api.get_user_playlists = AsyncMock(return_value=[])
    api.get_playlist_tracks = AsyncMock(return_value=[])
    return api


class TestGetUserPlaylists:
    """Tests for the get_user_playlists tool."""

    @pytest.mark.asyncio
    async def test_lists_playlists(self, api, sample_playlist):
        api.get_user_playlists.return_value = [Playlist.from_spotify(sample_playlist)]

        text = await get_user_playlists(api)

        assert text.startswith('Found 1 playlist(s):')
        assert '1. My Test Playlist' in text
        assert 'Tracks: 10' in text
        assert 'Description: A playlist for testing' in text
        assert 'Owner: Test User' in text
        assert 'ID: playlist123' in text
        api.get_user_playlists.assert_awaited_once_with(20)

    @pytest.mark.asyncio
    async def test_no_playlists(self, api):
        text = await get_user_playlists(api, 5)
        assert text == 'No playlists found. Create some playlists in Spotify!'


class TestGetPlaylistTracks:
    """Tests for the get_playlist_tracks tool."""

    @pytest.mark.asyncio
    async def test_lists_tracks(self, api, sample_track):
        api.get_playlist_tracks.return_value = [Track.from_spotify(sample_track)]

        text = await get_playlist_tracks(api, 'playlist123', 10)

        assert text.startswith('Playlist tracks (showing 1):')
        assert '1. Bohemian Rhapsody' in text
        api.get_playlist_tracks.assert_awaited_once_with('playlist123', 10)

    @pytest.mark.asyncio
    async def test_empty_playlist(self, api):
        text = await get_playlist_tracks(api, 'playlist123')
        assert text == 'No tracks found in playlist playlist123'

    @pytest.mark.asyncio
    async def test_limit_above_100_rejected(self, api):
        with pytest.raises(ValidationError):
            await get_playlist_tracks(api, 'playlist123', 101)
        api.get_playlist_tracks.assert_not_awaited()
