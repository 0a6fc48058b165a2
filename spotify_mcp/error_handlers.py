"""
Tool error handlers.

Provides consistent error text across all MCP tools by catching
Spotify exceptions and Pydantic validation errors at the tool boundary
and converting them to ToolError, which the MCP server reports to the
agent as an error result.
"""

import logging
from functools import wraps
from typing import Awaitable, Callable, TypeVar

from mcp.server.fastmcp.exceptions import ToolError
from pydantic import ValidationError

from spotify_mcp.spotify import (
    SpotifyAPIError,
    SpotifyAuthError,
    SpotifyError,
    SpotifyNoRefreshTokenError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

NOT_AUTHORIZED_MESSAGE = (
    "Spotify is not authorized yet. Run 'spotify-mcp authorize' and set "
    "SPOTIFY_REFRESH_TOKEN in the .env file."
)
AUTH_ERROR_MESSAGE = (
    "Authentication error. Please check your Spotify credentials and "
    "refresh token in the .env file."
)
NO_ACTIVE_DEVICE_MESSAGE = (
    "No active Spotify device found. Please open Spotify on a device "
    "(phone, computer, web player) to use playback controls."
)

_NO_DEVICE_MARKERS = ("no active device", "no devices found")


def format_validation_error(error: ValidationError) -> str:
    """Join Pydantic errors into one readable line."""
    errors_list = []
    for err in error.errors():
        msg = err["msg"]
        # Messages raised from our own validators carry this prefix
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        field = ".".join(str(loc) for loc in err["loc"])
        errors_list.append(f"{field}: {msg}" if field else msg)
    return "; ".join(errors_list) if errors_list else "Validation failed"


def format_tool_error(error: BaseException) -> str:
    """
    Map an exception to the text shown to the agent.

    Args:
        error: Exception raised by a tool handler.

    Returns:
        A short, non-technical sentence.
    """
    if isinstance(error, ValidationError):
        return format_validation_error(error)

    if isinstance(error, SpotifyNoRefreshTokenError):
        return NOT_AUTHORIZED_MESSAGE

    if isinstance(error, SpotifyAuthError):
        return AUTH_ERROR_MESSAGE

    if isinstance(error, SpotifyAPIError):
        remote = (error.remote_message or "").lower()
        if any(marker in remote for marker in _NO_DEVICE_MARKERS):
            return NO_ACTIVE_DEVICE_MESSAGE
        return error.message

    if isinstance(error, ValueError):
        return str(error)

    return f"Error: {error}"


def tool_error_handler(
    func: Callable[..., Awaitable[T]],
) -> Callable[..., Awaitable[T]]:
    """
    Decorator converting tool failures into ToolError.

    Expected failures are logged at WARNING; anything else is logged
    with its traceback.
    """

    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except ToolError:
            raise
        except (ValidationError, SpotifyError, ValueError) as e:
            message = format_tool_error(e)
            logger.warning("Tool %s failed: %s", func.__name__, message)
            raise ToolError(message) from e
        except Exception as e:
            logger.error(
                "Unexpected error in tool %s: %s",
                func.__name__, e, exc_info=True,
            )
            raise ToolError(format_tool_error(e)) from e

    return wrapper
