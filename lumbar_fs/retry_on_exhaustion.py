"""Fixed-delay retry for filesystem calls that run out of file handles."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from lumbar_fs.errors import ResourceExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_RETRY_DELAY = 0.25


async def retry_on_exhaustion(
    operation: Callable[..., Awaitable[T]],
    *args: Any,
    delay: float = DEFAULT_RETRY_DELAY,
) -> T:
    """Await ``operation(*args)``, retrying forever while handles are exhausted.

    Any other error propagates on the first attempt.
    """
    attempt = 0
    while True:
        try:
            return await operation(*args)
        except ResourceExhaustedError:
            attempt += 1
            logger.debug(
                "Handles exhausted (attempt %d), retrying in %.3fs: %r",
                attempt,
                delay,
                args,
            )
            await asyncio.sleep(delay)
