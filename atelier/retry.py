"""Bounded exponential backoff around a single remote call."""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

import httpx

from atelier.config import RETRY_ATTEMPTS, RETRY_INITIAL_DELAY

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRANSIENT_STATUSES = {429, 500, 503}
TRANSIENT_MARKERS = ("429", "quota", "xhr error", "network")


def extract_status(error: BaseException) -> int | None:
    """Pull an HTTP-like status code off an SDK or transport exception."""
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code

    for attr in ("code", "status_code", "status"):
        value = getattr(error, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value

    response = getattr(error, "response", None)
    status = getattr(response, "status_code", None)
    if isinstance(status, int):
        return status
    return None


def is_transient(error: BaseException) -> bool:
    if extract_status(error) in TRANSIENT_STATUSES:
        return True
    msg = str(error).lower()
    return any(marker in msg for marker in TRANSIENT_MARKERS)


async def _wait(seconds: float) -> None:
    await asyncio.sleep(seconds)


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    retries: int = RETRY_ATTEMPTS,
    delay: float = RETRY_INITIAL_DELAY,
) -> T:
    """
    Await ``operation()``, retrying transient failures.

    Rate limits, 5xx responses and network errors are retried up to
    ``retries`` more times, waiting ``delay`` seconds and doubling it each
    time. Anything else, or the last transient failure, is re-raised as is.
    """
    while True:
        try:
            return await operation()
        except Exception as e:
            if retries <= 0 or not is_transient(e):
                raise
            logger.warning("API error (%s). Retrying in %.1fs...", e, delay)
            await _wait(delay)
            retries -= 1
            delay *= 2
