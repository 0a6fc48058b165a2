"""
Spotify MCP server.

Exposes Spotify search, playback, playlist and device operations as
Model Context Protocol tools, backed by an authenticated-call core that
keeps the OAuth token fresh and retries rate-limited or unavailable calls.
"""

import logging
import sys

__version__ = "1.0.0"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level="INFO"):
    """
    Configure root logging on stderr.

    stdout carries the MCP stdio transport, so logs must never go there.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
