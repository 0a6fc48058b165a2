"""
Tests for request validation schemas.

Tests Pydantic models for MCP tool arguments.
"""

import pytest
from pydantic import ValidationError

from spotify_mcp.schemas import (
    AddToQueueRequest,
    PlaybackControlRequest,
    PlaylistTracksRequest,
    PlayTrackRequest,
    SearchTracksRequest,
    UserPlaylistsRequest,
)


class TestSearchTracksRequest:
    """Tests for SearchTracksRequest schema."""

    def test_default_limit(self):
        request = SearchTracksRequest(query='queen')
        assert request.limit == 10

    def test_query_is_stripped(self):
        request = SearchTracksRequest(query='  bohemian rhapsody  ')
        assert request.query == 'bohemian rhapsody'

    @pytest.mark.parametrize('query', ['', '   '])
    def test_empty_query_rejected(self, query):
        with pytest.raises(ValidationError) as exc_info:
            SearchTracksRequest(query=query)
        assert 'Search query cannot be empty' in str(exc_info.value)

    @pytest.mark.parametrize('limit', [0, 51])
    def test_limit_out_of_range(self, limit):
        with pytest.raises(ValidationError) as exc_info:
            SearchTracksRequest(query='queen', limit=limit)
        assert 'Limit must be between 1 and 50' in str(exc_info.value)

    @pytest.mark.parametrize('limit', [1, 50])
    def test_limit_bounds_accepted(self, limit):
        assert SearchTracksRequest(query='queen', limit=limit).limit == limit

    def test_unknown_fields_ignored(self):
        request = SearchTracksRequest(query='queen', market='US')
        assert not hasattr(request, 'market')


class TestTrackUriRequests:
    """Tests for PlayTrackRequest and AddToQueueRequest."""

    @pytest.mark.parametrize('schema', [PlayTrackRequest, AddToQueueRequest])
    def test_valid_uri(self, schema):
        request = schema(track_uri='spotify:track:4uLU6hMCjMI75M1A2tKUQC')
        assert request.track_uri == 'spotify:track:4uLU6hMCjMI75M1A2tKUQC'
        assert request.device_id is None

    @pytest.mark.parametrize('uri', [
        'spotify:album:abc',
        'https://open.spotify.com/track/abc',
        'spotify:track:',
        '',
    ])
    def test_invalid_uri_rejected(self, uri):
        with pytest.raises(ValidationError) as exc_info:
            PlayTrackRequest(track_uri=uri)
        assert 'Must be in format: spotify:track:xxx' in str(exc_info.value)

    def test_blank_device_becomes_none(self):
        request = AddToQueueRequest(track_uri='spotify:track:abc', device_id='  ')
        assert request.device_id is None

    def test_device_is_stripped(self):
        request = PlayTrackRequest(track_uri='spotify:track:abc', device_id=' dev1 ')
        assert request.device_id == 'dev1'


class TestPlaybackControlRequest:
    """Tests for PlaybackControlRequest schema."""

    @pytest.mark.parametrize('action', ['play', 'pause', 'next', 'previous'])
    def test_valid_actions(self, action):
        assert PlaybackControlRequest(action=action).action == action

    def test_invalid_action_rejected(self):
        with pytest.raises(ValidationError):
            PlaybackControlRequest(action='rewind')


class TestPlaylistRequests:
    """Tests for playlist argument schemas."""

    def test_user_playlists_default_limit(self):
        assert UserPlaylistsRequest().limit == 20

    def test_user_playlists_limit_max(self):
        with pytest.raises(ValidationError) as exc_info:
            UserPlaylistsRequest(limit=51)
        assert 'Limit must be between 1 and 50' in str(exc_info.value)

    def test_playlist_tracks_defaults(self):
        request = PlaylistTracksRequest(playlist_id='37i9dQZF1DXcBWIGoYBM5M')
        assert request.limit == 50

    def test_playlist_tracks_limit_max(self):
        assert PlaylistTracksRequest(playlist_id='p', limit=100).limit == 100
        with pytest.raises(ValidationError) as exc_info:
            PlaylistTracksRequest(playlist_id='p', limit=101)
        assert 'Limit must be between 1 and 100' in str(exc_info.value)

    def test_empty_playlist_id_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            PlaylistTracksRequest(playlist_id=' ')
        assert 'Playlist ID cannot be empty' in str(exc_info.value)
