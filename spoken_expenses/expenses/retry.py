"""Uniform retry with exponential backoff for model calls."""
import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from tenacity import AsyncRetrying, before_sleep_log, stop_after_attempt, wait_exponential

from spoken_expenses.constants import INITIAL_RETRY_DELAY, MAX_RETRIES, RETRY_BACKOFF_FACTOR

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    retries: int = MAX_RETRIES,
    delay: float = INITIAL_RETRY_DELAY,
    sleep: Sleep = asyncio.sleep,
) -> T:
    """Run operation, retrying any exception up to `retries` times.

    Waits `delay` seconds before the first retry and doubles it for each one
    after. The last exception is re-raised unchanged once the budget is spent.
    """
    retrying = AsyncRetrying(
        stop=stop_after_attempt(retries + 1),
        wait=wait_exponential(multiplier=delay, exp_base=RETRY_BACKOFF_FACTOR),
        sleep=sleep,
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    return await retrying(operation)
