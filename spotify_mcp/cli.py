"""
Command line entry point.

    spotify-mcp serve        Run the MCP server on stdio
    spotify-mcp authorize    Obtain a refresh token through the browser
    spotify-mcp auth-url     Print the authorization URL
    spotify-mcp exchange     Exchange an authorization code by hand
"""

import asyncio
import logging
import webbrowser
from urllib.parse import urlparse

import click

from spotify_mcp import configure_logging
from spotify_mcp.config import get_config, get_retry_policy, validate_required_env_vars
from spotify_mcp.spotify import (
    SpotifyAPI,
    SpotifyCredentials,
    SpotifyTokenError,
    SpotifyTokenManager,
)

logger = logging.getLogger(__name__)


def _load_credentials(config_class) -> SpotifyCredentials:
    try:
        validate_required_env_vars(config_class)
        return SpotifyCredentials.from_config(config_class)
    except ValueError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option(
    "--env",
    "config_name",
    default=None,
    help="Config profile: development, production or testing.",
)
@click.pass_context
def main(ctx, config_name):
    """Spotify tools for AI agents over the Model Context Protocol."""
    config_class = get_config(config_name)
    configure_logging(config_class.LOG_LEVEL)
    ctx.obj = config_class


@main.command()
@click.pass_obj
def serve(config_class):
    """Run the MCP server on stdio."""
    from spotify_mcp.server import create_server

    credentials = _load_credentials(config_class)
    tokens = SpotifyTokenManager(credentials)
    api = SpotifyAPI(tokens, retry_policy=get_retry_policy(config_class))
    mcp = create_server(api)

    logger.info("Spotify MCP Server running on stdio")
    try:
        mcp.run()
    finally:
        api.close()


@main.command()
@click.option("--no-browser", is_flag=True, help="Do not open a browser window.")
@click.pass_obj
def authorize(config_class, no_browser):
    """Run the local callback app and print the refresh token."""
    from spotify_mcp.authorize import create_authorize_app

    credentials = _load_credentials(config_class)
    tokens = SpotifyTokenManager(credentials)

    parsed = urlparse(credentials.redirect_uri)
    host = parsed.hostname or "localhost"
    port = parsed.port or 3000

    def on_token(token_info):
        click.echo("\nAuthorization successful. Add this to your .env file:\n")
        click.echo(f"SPOTIFY_REFRESH_TOKEN={token_info.refresh_token}\n")

    try:
        app = create_authorize_app(
            tokens, credentials.redirect_uri, on_token=on_token
        )
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    start_url = f"http://{host}:{port}/"
    click.echo(f"Open {start_url} to authorize Spotify access.")
    if not no_browser:
        webbrowser.open(start_url)
    app.run(host=host, port=port)


@main.command("auth-url")
@click.option("--state", default=None, help="Optional CSRF state value.")
@click.pass_obj
def auth_url(config_class, state):
    """Print the Spotify authorization URL."""
    credentials = _load_credentials(config_class)
    click.echo(SpotifyTokenManager(credentials).get_auth_url(state=state))


@main.command()
@click.argument("code")
@click.pass_obj
def exchange(config_class, code):
    """Exchange an authorization CODE and print the refresh token."""
    credentials = _load_credentials(config_class)
    tokens = SpotifyTokenManager(credentials)
    try:
        token_info = asyncio.run(tokens.exchange_code(code))
    except SpotifyTokenError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"SPOTIFY_REFRESH_TOKEN={token_info.refresh_token}")
