"""
Spotify API error handling and retry policy.

Contains the retry policy, failure classification, the pure retry
decision, backoff calculation, and the mapping from status codes to
user-facing error messages used by SpotifyCallExecutor.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from .exceptions import (
    SpotifyAPIError,
    SpotifyForbiddenError,
    SpotifyNotFoundError,
    SpotifyRateLimitError,
    SpotifyServiceUnavailableError,
    SpotifyUnauthorizedError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Bounds for retrying a remote call.

    Attributes:
        max_retries: Additional attempts allowed after the first one for
            rate-limited and service-unavailable failures.
        initial_delay: First backoff wait, in seconds.
        max_delay: Ceiling for any computed backoff wait, in seconds.
        backoff_multiplier: Growth factor applied after each backoff.
        max_auth_refreshes: Token refreshes allowed per call when Spotify
            answers 401. These do not consume max_retries.
    """

    max_retries: int = 3
    initial_delay: float = 1.0
    max_delay: float = 10.0
    backoff_multiplier: float = 2.0
    max_auth_refreshes: int = 1

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValueError("max_retries must be non-negative")
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("delays must be non-negative")
        if self.backoff_multiplier < 1:
            raise ValueError("backoff_multiplier must be at least 1")
        if self.max_auth_refreshes < 0:
            raise ValueError("max_auth_refreshes must be non-negative")


DEFAULT_RETRY_POLICY = RetryPolicy()


class FailureKind(Enum):
    """Handling strategy for a failed remote call."""

    AUTH_EXPIRED = "auth_expired"
    RATE_LIMITED = "rate_limited"
    SERVICE_UNAVAILABLE = "service_unavailable"
    FATAL = "fatal"


class RetryAction(Enum):
    """What the executor does next after a failure."""

    REFRESH = "refresh"
    BACKOFF = "backoff"
    RAISE = "raise"


@dataclass(frozen=True)
class ClassifiedFailure:
    """A failed remote call reduced to what the retry loop needs."""

    kind: FailureKind
    status_code: Optional[int] = None
    retry_after: Optional[float] = None
    message: str = "Unknown error"


def classify_failure(exception: BaseException) -> ClassifiedFailure:
    """
    Classify an exception raised by a remote operation.

    401 is AUTH_EXPIRED, 429 is RATE_LIMITED (with the Retry-After hint
    when present), 503 is SERVICE_UNAVAILABLE, and anything else,
    including exceptions without a recognizable status code, is FATAL.
    """
    status_code = extract_status_code(exception)
    message = extract_message(exception)

    if status_code == 401:
        kind = FailureKind.AUTH_EXPIRED
    elif status_code == 429:
        return ClassifiedFailure(
            kind=FailureKind.RATE_LIMITED,
            status_code=status_code,
            retry_after=extract_retry_after(exception),
            message=message,
        )
    elif status_code == 503:
        kind = FailureKind.SERVICE_UNAVAILABLE
    else:
        kind = FailureKind.FATAL

    return ClassifiedFailure(kind=kind, status_code=status_code, message=message)


def next_action(
    failure: ClassifiedFailure,
    attempt: int,
    auth_refreshes: int,
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
) -> RetryAction:
    """
    Decide how to handle a classified failure.

    Args:
        failure: The classified failure.
        attempt: Zero-based index of the attempt that just failed.
        auth_refreshes: Token refreshes already performed for this call.
        policy: Retry bounds.
    """
    if failure.kind is FailureKind.AUTH_EXPIRED:
        if auth_refreshes < policy.max_auth_refreshes:
            return RetryAction.REFRESH
        return RetryAction.RAISE

    if failure.kind in (
        FailureKind.RATE_LIMITED, FailureKind.SERVICE_UNAVAILABLE,
    ):
        if attempt < policy.max_retries:
            return RetryAction.BACKOFF
        return RetryAction.RAISE

    return RetryAction.RAISE


def backoff_wait(
    failure: ClassifiedFailure,
    current_delay: float,
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
) -> float:
    """
    Seconds to wait before the next attempt.

    A Retry-After hint on a 429 wins for this single wait. Otherwise the
    current backoff delay is used, capped at max_delay.
    """
    if (
        failure.kind is FailureKind.RATE_LIMITED
        and failure.retry_after is not None
    ):
        return failure.retry_after
    return min(current_delay, policy.max_delay)


def next_delay(current_delay: float, policy: RetryPolicy = DEFAULT_RETRY_POLICY) -> float:
    """Grow the backoff delay after a wait."""
    return current_delay * policy.backoff_multiplier


# =============================================================================
# Failure inspection
# =============================================================================


def extract_status_code(exception: BaseException) -> Optional[int]:
    """
    Find the HTTP status code carried by an exception.

    Looks at ``http_status`` (spotipy), ``status_code``,
    ``response.status_code`` (requests) and ``body["error"]["status"]``.
    """
    for candidate in (
        getattr(exception, "http_status", None),
        getattr(exception, "status_code", None),
        getattr(getattr(exception, "response", None), "status_code", None),
        _body_error(exception).get("status"),
    ):
        status = _as_int(candidate)
        if status is not None:
            return status
    return None


def extract_retry_after(exception: BaseException) -> Optional[float]:
    """Read the Retry-After header (seconds) from an exception, if any."""
    headers = getattr(exception, "headers", None)
    if headers is None:
        headers = getattr(getattr(exception, "response", None), "headers", None)
    if not isinstance(headers, Mapping):
        return None

    for key, value in headers.items():
        if str(key).lower() == "retry-after":
            try:
                seconds = float(value)
            except (TypeError, ValueError):
                logger.debug("Ignoring unparseable Retry-After: %r", value)
                return None
            return seconds if seconds >= 0 else None
    return None


def extract_message(exception: BaseException) -> str:
    """Best human-readable message from the remote, without the request URL."""
    message = _body_error(exception).get("message")
    if not message:
        message = getattr(exception, "msg", None) or str(exception)
    message = str(message)
    # spotipy prefixes messages with "<url>:\n "
    if ":\n" in message:
        message = message.split(":\n", 1)[1]
    return message.strip() or "Unknown error"


def _body_error(exception: BaseException) -> Mapping[str, Any]:
    body = getattr(exception, "body", None)
    if isinstance(body, Mapping):
        error = body.get("error")
        if isinstance(error, Mapping):
            return error
    return {}


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


# =============================================================================
# Terminal errors
# =============================================================================


def friendly_message(
    status_code: Optional[int],
    label: str,
    remote_message: str,
) -> str:
    """Map a status code to a short sentence suitable for display."""
    if status_code == 401:
        return "Authentication failed. Please re-authorize the application."
    if status_code == 403:
        return "Access forbidden. You may not have the required permissions."
    if status_code == 404:
        return "Resource not found. Please check the provided ID or URI."
    if status_code == 429:
        return "Rate limit exceeded. Please try again later."
    if status_code is not None and 500 <= status_code < 600:
        return (
            "Spotify service is temporarily unavailable. "
            "Please try again later."
        )
    return f"Failed to {label}: {remote_message}"


def build_api_error(
    failure: ClassifiedFailure,
    label: str,
    cause: Optional[BaseException] = None,
) -> SpotifyAPIError:
    """Build the terminal exception for a failure that will not be retried."""
    status_code = failure.status_code
    kwargs = dict(
        status_code=status_code,
        cause=cause,
        remote_message=failure.message,
    )
    message = friendly_message(status_code, label, failure.message)

    if status_code == 401:
        return SpotifyUnauthorizedError(message, **kwargs)
    if status_code == 403:
        return SpotifyForbiddenError(message, **kwargs)
    if status_code == 404:
        return SpotifyNotFoundError(message, **kwargs)
    if status_code == 429:
        return SpotifyRateLimitError(
            message, retry_after=failure.retry_after, **kwargs
        )
    if status_code is not None and 500 <= status_code < 600:
        return SpotifyServiceUnavailableError(message, **kwargs)
    return SpotifyAPIError(message, **kwargs)
