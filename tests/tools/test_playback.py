"""
Tests for the playback tools.
"""

import pytest
from pydantic import ValidationError
from unittest.mock import AsyncMock, MagicMock

from spotify_mcp.models import Device, PlaybackState, Track
from spotify_mcp.tools import (
    add_to_queue,
    get_current_playback,
    play_track,
    playback_control,
)


@pytest.fixture
def api():
    api = MagicMock()
    api.play_track = AsyncMock()
    api.control_playback = AsyncMock()
    api.add_to_queue = AsyncMock()
    api.get_current_playback = AsyncMock()
    return api


class TestPlayTrack:
    """Tests for the play_track tool."""

    @pytest.mark.asyncio
    async def test_plays_on_active_device(self, api):
        text = await play_track(api, 'spotify:track:abc')

        assert text == 'Successfully started playing track'
        api.play_track.assert_awaited_once_with('spotify:track:abc', None)

    @pytest.mark.asyncio
    async def test_plays_on_given_device(self, api):
        text = await play_track(api, 'spotify:track:abc', 'device123')

        assert text == 'Successfully started playing track on device device123'

    @pytest.mark.asyncio
    async def test_invalid_uri_never_calls_api(self, api):
        with pytest.raises(ValidationError):
            await play_track(api, 'spotify:album:abc')
        api.play_track.assert_not_awaited()


class TestPlaybackControl:
    """Tests for the playback_control tool."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize('action,expected', [
        ('play', 'Resumed playback'),
        ('pause', 'Paused playback'),
        ('next', 'Skipped to next track'),
        ('previous', 'Skipped to previous track'),
    ])
    async def test_actions(self, api, action, expected):
        assert await playback_control(api, action) == expected
        api.control_playback.assert_awaited_once_with(action, None)

    @pytest.mark.asyncio
    async def test_unknown_action_rejected(self, api):
        with pytest.raises(ValidationError):
            await playback_control(api, 'shuffle')


class TestGetCurrentPlayback:
    """Tests for the get_current_playback tool."""

    @pytest.mark.asyncio
    async def test_nothing_playing(self, api):
        api.get_current_playback.return_value = None

        text = await get_current_playback(api)

        assert text == 'No active playback. Please start playing something on Spotify.'

    @pytest.mark.asyncio
    async def test_describes_playback(self, api, sample_track, sample_device):
        api.get_current_playback.return_value = PlaybackState(
            is_playing=False,
            track=Track.from_spotify(sample_track),
            progress_ms=61000,
            device=Device.from_spotify(sample_device),
            shuffle_state=True,
            repeat_state='context',
        )

        text = await get_current_playback(api)

        assert text.startswith('Current Playback:')
        assert 'Status: Paused' in text
        assert 'Track: Bohemian Rhapsody' in text
        assert 'Progress: 1:01 / 5:54' in text
        assert 'Device: Kitchen Speaker (Speaker)' in text
        assert 'Volume: 65%' in text
        assert 'Shuffle: On' in text
        assert 'Repeat: context' in text


class TestAddToQueue:
    """Tests for the add_to_queue tool."""

    @pytest.mark.asyncio
    async def test_adds_track(self, api):
        text = await add_to_queue(api, 'spotify:track:abc', ' ')

        assert text == 'Successfully added track to queue'
        api.add_to_queue.assert_awaited_once_with('spotify:track:abc', None)
