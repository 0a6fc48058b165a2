"""
Tests for the authorization helper app.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from spotify_mcp.authorize import callback_path, create_authorize_app
from spotify_mcp.spotify import SpotifyAuthExchangeError, TokenInfo


REDIRECT_URI = 'http://localhost:3000/callback'


@pytest.fixture
def token_manager():
    manager = MagicMock()
    manager.get_auth_url.return_value = 'https://accounts.spotify.com/authorize?x=1'
    manager.exchange_code = AsyncMock(return_value=TokenInfo(
        access_token='access', refresh_token='new_refresh_token', expires_at=0,
    ))
    return manager


@pytest.fixture
def on_token():
    return MagicMock()


@pytest.fixture
def app(token_manager, on_token):
    app = create_authorize_app(token_manager, REDIRECT_URI, on_token=on_token)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def test_callback_path():
    assert callback_path(REDIRECT_URI) == '/callback'
    assert callback_path('http://127.0.0.1:8888/spotify/cb') == '/spotify/cb'


@pytest.mark.parametrize('redirect_uri', [
    'http://localhost:3000',
    'http://localhost:3000/',
])
def test_root_redirect_uri_rejected(token_manager, redirect_uri):
    with pytest.raises(ValueError, match='must include a callback path'):
        create_authorize_app(token_manager, redirect_uri)


class TestIndex:
    """Tests for the start page."""

    def test_redirects_to_spotify_with_state(self, client, app, token_manager):
        response = client.get('/')

        assert response.status_code == 302
        assert response.headers['Location'].startswith('https://accounts.spotify.com')
        token_manager.get_auth_url.assert_called_once_with(
            state=app.config['OAUTH_STATE']
        )


class TestCallback:
    """Tests for the OAuth callback route."""

    def test_success_shows_refresh_token(self, client, app, token_manager, on_token):
        state = app.config['OAUTH_STATE']

        response = client.get(f'/callback?code=abc&state={state}')

        assert response.status_code == 200
        assert b'SPOTIFY_REFRESH_TOKEN=new_refresh_token' in response.data
        token_manager.exchange_code.assert_awaited_once_with('abc')
        on_token.assert_called_once()

    def test_provider_error(self, client, token_manager):
        response = client.get('/callback?error=access_denied')

        assert response.status_code == 400
        assert b'access_denied' in response.data
        token_manager.exchange_code.assert_not_awaited()

    def test_state_mismatch(self, client, token_manager):
        response = client.get('/callback?code=abc&state=forged')

        assert response.status_code == 400
        assert b'State mismatch' in response.data
        token_manager.exchange_code.assert_not_awaited()

    def test_missing_code(self, client, app):
        state = app.config['OAUTH_STATE']

        response = client.get(f'/callback?state={state}')

        assert response.status_code == 400

    def test_exchange_failure(self, client, app, token_manager, on_token):
        token_manager.exchange_code.side_effect = SpotifyAuthExchangeError(
            'Failed to exchange authorization code for token: Invalid authorization code'
        )
        state = app.config['OAUTH_STATE']

        response = client.get(f'/callback?code=bad&state={state}')

        assert response.status_code == 400
        assert b'Invalid authorization code' in response.data
        on_token.assert_not_called()
