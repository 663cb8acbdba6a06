"""
Exponential-backoff retries for catalog reads.

The unit catalog database can be briefly unreachable while the service comes
up. Transient database and timeout errors are retried; anything else,
including domain errors such as a closed repository, is raised on the first
attempt.
"""

import asyncio
import logging
from functools import wraps
from typing import Any, Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class RetryableError(Exception):
    """Transient failure worth another attempt (lost connection, pool saturation)."""


class NonRetryableError(Exception):
    """Deterministic failure; retrying would give the same result."""


RETRYABLE_EXCEPTIONS = (RetryableError, SQLAlchemyError, asyncio.TimeoutError)


def backoff_delay(attempt: int, base_delay: float, max_delay: float) -> float:
    """Delay before retry number `attempt` (0-based): base * 2^attempt, capped."""
    return min(base_delay * (2 ** attempt), max_delay)


def async_retry(
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 10.0
) -> Callable[[F], F]:
    """Retry an async callable on RETRYABLE_EXCEPTIONS.

    Example:
        @async_retry(max_attempts=3, base_delay=0.5, max_delay=5.0)
        async def list_summaries(self):
            ...

    The last error is re-raised once `max_attempts` calls have failed.
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            for attempt in range(max_attempts):
                try:
                    return await func(*args, **kwargs)
                except NonRetryableError:
                    raise
                except RETRYABLE_EXCEPTIONS as e:
                    if attempt == max_attempts - 1:
                        logger.error(
                            f"{func.__name__} failed after {max_attempts} attempts: {e}",
                            extra={'function': func.__name__, 'attempts': max_attempts}
                        )
                        raise

                    delay = backoff_delay(attempt, base_delay, max_delay)
                    logger.warning(
                        f"{func.__name__} attempt {attempt + 1}/{max_attempts} failed: {e}; "
                        f"retrying in {delay:.2f}s",
                        extra={'function': func.__name__, 'attempt': attempt + 1, 'delay': delay}
                    )
                    await asyncio.sleep(delay)

        return wrapper
    return decorator
