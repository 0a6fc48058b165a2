"""
Pytest configuration and shared fixtures for spotify-mcp tests.

This module provides common fixtures used across all test modules,
including credentials, a controllable clock, token endpoint responses,
and sample Spotify payloads.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from spotify_mcp.spotify.credentials import SpotifyCredentials


# =============================================================================
# Helpers
# =============================================================================

class FakeClock:
    """Controllable wall clock for token expiry tests."""

    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class RecordingSleep:
    """Awaitable sleep replacement that records requested waits."""

    def __init__(self):
        self.waits = []

    async def __call__(self, seconds):
        self.waits.append(seconds)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def credentials():
    """Valid SpotifyCredentials without a refresh token."""
    return SpotifyCredentials(
        client_id='test_client_id',
        client_secret='test_client_secret',
        redirect_uri='http://localhost:3000/callback'
    )


@pytest.fixture
def seeded_credentials():
    """Valid SpotifyCredentials carrying a refresh token."""
    return SpotifyCredentials(
        client_id='test_client_id',
        client_secret='test_client_secret',
        redirect_uri='http://localhost:3000/callback',
        refresh_token='seed_refresh_token',
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def exchange_payload():
    """Token endpoint body for a successful code exchange."""
    return {
        'access_token': 'test_access_token',
        'token_type': 'Bearer',
        'expires_in': 3600,
        'refresh_token': 'test_refresh_token',
        'scope': 'user-read-playback-state user-modify-playback-state',
    }


@pytest.fixture
def refresh_payload():
    """Token endpoint body for a refresh that omits refresh_token and scope."""
    return {
        'access_token': 'refreshed_access_token',
        'token_type': 'Bearer',
        'expires_in': 3600,
    }


@pytest.fixture
def fresh_token_manager():
    """Token manager stub that always reports a fresh token."""
    tokens = MagicMock()
    tokens.ensure_fresh = AsyncMock(return_value='access')
    tokens.refresh = AsyncMock()
    tokens.access_token = 'access'
    return tokens


@pytest.fixture
def sample_track():
    """Sample Spotify track data."""
    return {
        'id': 'track123',
        'name': 'Bohemian Rhapsody',
        'artists': [{'name': 'Queen'}],
        'album': {'name': 'A Night at the Opera'},
        'uri': 'spotify:track:track123',
        'duration_ms': 354000,
    }


@pytest.fixture
def sample_device():
    """Sample Spotify Connect device."""
    return {
        'id': 'device123',
        'name': 'Kitchen Speaker',
        'type': 'Speaker',
        'is_active': True,
        'volume_percent': 65,
    }


@pytest.fixture
def sample_playlist():
    """Sample simplified playlist object."""
    return {
        'id': 'playlist123',
        'name': 'My Test Playlist',
        'description': 'A playlist for testing',
        'owner': {'id': 'user123', 'display_name': 'Test User'},
        'tracks': {'total': 10},
        'uri': 'spotify:playlist:playlist123',
    }
