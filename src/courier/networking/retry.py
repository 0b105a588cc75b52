"""Fixed-delay retry control for dispatch attempts."""

from __future__ import annotations

import logging
from asyncio import sleep
from typing import Awaitable, Callable, TypeVar

from .config import RetryPolicy
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryController:
    """Runs an attempt up to ``policy.retries`` times.

    Any exception raised by an attempt counts as a failed attempt. A delay of
    ``policy.retry_delay_ms`` separates consecutive attempts; none follows
    the last one. Only the final failure reaches the caller.
    """

    def __init__(self, policy: RetryPolicy) -> None:
        resolved = policy.resolved()
        if resolved.retries is None or resolved.retries < 1:
            raise ConfigurationError(
                f"retries must be at least 1, got {resolved.retries}"
            )
        self._attempts: int = resolved.retries
        self._delay_ms: int = resolved.retry_delay_ms or 0

    @property
    def attempts(self) -> int:
        return self._attempts

    async def execute(self, attempt_fn: Callable[[], Awaitable[T]]) -> T:
        last_error: Exception | None = None
        for attempt in range(1, self._attempts + 1):
            try:
                return await attempt_fn()
            except Exception as exc:
                last_error = exc
                if attempt < self._attempts:
                    logger.warning(
                        "retry %d/%d failed (%s), waiting %dms",
                        attempt,
                        self._attempts,
                        exc,
                        self._delay_ms,
                    )
                    await sleep(self._delay_ms / 1000)

        assert last_error is not None
        logger.debug(
            "all %d attempts failed: %s", self._attempts, last_error
        )
        raise last_error
