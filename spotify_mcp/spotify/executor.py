"""
Authenticated call executor.

Runs one remote Spotify operation with a freshness check up front,
token refresh on 401, and bounded exponential backoff on 429/503.
Terminal failures are converted to SpotifyAPIError subclasses.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from .auth import SpotifyTokenManager
from .error_handling import (
    DEFAULT_RETRY_POLICY,
    RetryAction,
    RetryPolicy,
    backoff_wait,
    build_api_error,
    classify_failure,
    next_action,
    next_delay,
)
from .exceptions import SpotifyError

logger = logging.getLogger(__name__)

T = TypeVar("T")

RemoteOperation = Callable[[], Awaitable[T]]


class SpotifyCallExecutor:
    """
    Executes remote operations against the Spotify Web API.

    The executor holds no per-call state, so many ``run`` calls can be
    in flight at once; waiting in one never blocks another. They share
    the token manager, so a refresh made by one call is seen by all.

    Example:
        executor = SpotifyCallExecutor(tokens)
        result = await executor.run(
            lambda: asyncio.to_thread(sp.search, q="queen", type="track"),
            "search tracks",
        )
    """

    def __init__(
        self,
        token_manager: SpotifyTokenManager,
        policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize the executor.

        Args:
            token_manager: Owner of the credential used by operations.
            policy: Retry bounds. Defaults to DEFAULT_RETRY_POLICY.
            sleep: Awaitable used for backoff waits, in seconds.
        """
        self._tokens = token_manager
        self._policy = policy or DEFAULT_RETRY_POLICY
        self._sleep = sleep

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    async def run(self, operation: RemoteOperation, label: str) -> T:
        """
        Execute ``operation`` with re-authentication and retry.

        Args:
            operation: Zero-argument callable returning an awaitable that
                performs one HTTP call.
            label: Short description of the operation, e.g.
                "search tracks", used in logs and error messages.

        Returns:
            Whatever the operation returned, untouched.

        Raises:
            SpotifyTokenError: If the credential cannot be made fresh,
                before the first attempt or during a 401 refresh.
            SpotifyAPIError: If the operation fails terminally.
        """
        await self._tokens.ensure_fresh()

        policy = self._policy
        delay = policy.initial_delay
        attempt = 0
        auth_refreshes = 0

        while True:
            try:
                return await operation()
            except SpotifyError:
                raise
            except Exception as e:
                failure = classify_failure(e)
                action = next_action(failure, attempt, auth_refreshes, policy)

                if action is RetryAction.REFRESH:
                    logger.info(
                        "Token expired during %s, refreshing", label,
                    )
                    await self._tokens.refresh()
                    auth_refreshes += 1
                    continue

                if action is RetryAction.BACKOFF:
                    wait = backoff_wait(failure, delay, policy)
                    logger.warning(
                        "%s during %s, retrying in %.2fs (attempt %d/%d)",
                        failure.kind.value, label, wait,
                        attempt + 1, policy.max_retries,
                    )
                    await self._sleep(wait)
                    delay = next_delay(delay, policy)
                    attempt += 1
                    continue

                error = build_api_error(failure, label, cause=e)
                if failure.status_code is None or failure.status_code >= 500:
                    logger.error(
                        "Spotify call %s failed after %d attempt(s): %s",
                        label, attempt + 1, e,
                    )
                else:
                    logger.warning(
                        "Spotify call %s failed with %s: %s",
                        label, failure.status_code, failure.message,
                    )
                raise error from e
