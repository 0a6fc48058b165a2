"""
One-time authorization helper.

A tiny Flask app that walks the user through the Spotify OAuth consent
screen and shows the resulting refresh token, which then goes into the
.env file as SPOTIFY_REFRESH_TOKEN.
"""

import asyncio
import logging
import secrets
from typing import Callable, Optional
from urllib.parse import urlparse

from flask import Flask, redirect, request
from markupsafe import escape

from spotify_mcp.spotify import (
    SpotifyAuthExchangeError,
    SpotifyTokenManager,
    TokenInfo,
)

logger = logging.getLogger(__name__)


def callback_path(redirect_uri: str) -> str:
    """
    Path component of the redirect URI, e.g. "/callback".

    Raises:
        ValueError: If the path is empty or "/", which is the start page.
    """
    path = urlparse(redirect_uri).path
    if path in ("", "/"):
        raise ValueError(
            f"Redirect URI {redirect_uri} must include a callback path, "
            "e.g. http://localhost:3000/callback"
        )
    return path


def _page(title: str, body: str) -> str:
    return (
        "<!doctype html><html><head><meta charset='utf-8'>"
        f"<title>{escape(title)}</title></head>"
        f"<body><h1>{escape(title)}</h1>{body}</body></html>"
    )


def create_authorize_app(
    token_manager: SpotifyTokenManager,
    redirect_uri: str,
    on_token: Optional[Callable[[TokenInfo], None]] = None,
) -> Flask:
    """
    Create the authorization Flask app.

    Args:
        token_manager: Manager used to build the URL and exchange the code.
        redirect_uri: Redirect URI registered with the Spotify app; its
            path becomes the callback route.
        on_token: Optional callback invoked with the new TokenInfo.

    Returns:
        Flask application.

    Raises:
        ValueError: If the redirect URI has no callback path.
    """
    route = callback_path(redirect_uri)
    app = Flask(__name__)
    app.config["OAUTH_STATE"] = secrets.token_urlsafe(16)

    @app.route("/")
    def index():
        """Send the user to the Spotify consent screen."""
        return redirect(token_manager.get_auth_url(state=app.config["OAUTH_STATE"]))

    @app.route(route)
    def callback():
        """Exchange the authorization code and show the refresh token."""
        error = request.args.get("error")
        if error:
            logger.error(f"Authorization denied: {error}")
            return _page(
                "Authorization failed",
                f"<p>Spotify returned an error: {escape(error)}</p>",
            ), 400

        if request.args.get("state") != app.config["OAUTH_STATE"]:
            logger.warning("Callback received with mismatched state")
            return _page(
                "Authorization failed",
                "<p>State mismatch. Please start again from the home page.</p>",
            ), 400

        code = request.args.get("code")
        if not code:
            return _page(
                "Authorization failed",
                "<p>No authorization code was provided.</p>",
            ), 400

        try:
            token_info = asyncio.run(token_manager.exchange_code(code))
        except SpotifyAuthExchangeError as e:
            logger.error(f"Code exchange failed: {e}")
            return _page(
                "Authorization failed", f"<p>{escape(str(e))}</p>"
            ), 400

        if on_token is not None:
            on_token(token_info)

        return _page(
            "Authorization successful",
            "<p>Add this line to your .env file:</p>"
            f"<pre>SPOTIFY_REFRESH_TOKEN={escape(token_info.refresh_token)}</pre>"
            "<p>You can close this window and stop the helper.</p>",
        )

    return app
