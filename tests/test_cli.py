"""
Tests for the command line interface.
"""

import click
import pytest
from click.testing import CliRunner
from unittest.mock import AsyncMock, MagicMock, patch

from spotify_mcp.cli import _load_credentials, main
from spotify_mcp.config import TestingConfig
from spotify_mcp.spotify import SpotifyAuthExchangeError, TokenInfo


@pytest.fixture
def runner():
    return CliRunner()


def test_load_credentials_from_testing_config():
    credentials = _load_credentials(TestingConfig)
    assert credentials.refresh_token == 'test_refresh_token'


def test_load_credentials_missing_values():
    class Empty:
        pass

    with pytest.raises(click.ClickException, match='Missing required'):
        _load_credentials(Empty)


def test_auth_url(runner):
    result = runner.invoke(main, ['--env', 'testing', 'auth-url', '--state', 'xyz'])

    assert result.exit_code == 0
    assert 'https://accounts.spotify.com/authorize?' in result.output
    assert 'state=xyz' in result.output


@patch('spotify_mcp.cli.SpotifyTokenManager')
def test_exchange_prints_refresh_token(mock_manager_class, runner):
    mock_manager_class.return_value.exchange_code = AsyncMock(return_value=TokenInfo(
        access_token='a', refresh_token='printed_refresh_token', expires_at=0,
    ))

    result = runner.invoke(main, ['--env', 'testing', 'exchange', 'the_code'])

    assert result.exit_code == 0
    assert 'SPOTIFY_REFRESH_TOKEN=printed_refresh_token' in result.output
    mock_manager_class.return_value.exchange_code.assert_awaited_once_with('the_code')


@patch('spotify_mcp.cli.SpotifyTokenManager')
def test_exchange_failure(mock_manager_class, runner):
    mock_manager_class.return_value.exchange_code = AsyncMock(
        side_effect=SpotifyAuthExchangeError('Failed to exchange authorization code')
    )

    result = runner.invoke(main, ['--env', 'testing', 'exchange', 'bad'])

    assert result.exit_code != 0
    assert 'Failed to exchange authorization code' in result.output


@patch('spotify_mcp.server.create_server')
def test_serve_runs_server(mock_create_server, runner):
    mcp = MagicMock()
    mock_create_server.return_value = mcp

    result = runner.invoke(main, ['--env', 'testing', 'serve'])

    assert result.exit_code == 0
    mcp.run.assert_called_once()
