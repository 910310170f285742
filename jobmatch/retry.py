"""Retry decorator with exponential backoff for collaborator calls."""
from __future__ import annotations

import functools
import logging
import random
import time
from typing import Any, Callable, Tuple, Type

logger = logging.getLogger(__name__)

# Request Timeout, Too Many Requests and the transient 5xx family.
RETRYABLE_HTTP_STATUSES: frozenset[int] = frozenset({408, 429, 500, 502, 503, 504})


def should_retry_http_status(status_code: int | None) -> bool:
    """True when an HTTP status is worth another attempt."""
    return status_code in RETRYABLE_HTTP_STATUSES


def retry(
    *,
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    backoff_factor: float = 2.0,
    jitter: bool = True,
    retryable: Tuple[Type[BaseException], ...] = (Exception,),
    giveup: Callable[[BaseException], bool] | None = None,
    sleep: Callable[[float], None] | None = None,
) -> Callable:
    """Decorator: retries the wrapped function with exponential backoff.

    ``giveup`` lets a caller re-raise a retryable exception immediately, e.g.
    a 404 from an HTTP API that will not change on the next attempt.
    """

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            last_exc: BaseException | None = None
            for attempt in range(1, max_attempts + 1):
                try:
                    return fn(*args, **kwargs)
                except retryable as exc:
                    last_exc = exc
                    if giveup is not None and giveup(exc):
                        logger.debug("%s gave up on %s", fn.__qualname__, exc)
                        raise
                    if attempt == max_attempts:
                        logger.error(
                            "%s failed after %d attempts: %s",
                            fn.__qualname__,
                            max_attempts,
                            exc,
                        )
                        raise
                    delay = min(
                        base_delay * (backoff_factor ** (attempt - 1)), max_delay
                    )
                    if jitter:
                        delay *= 0.5 + random.random()
                    logger.warning(
                        "%s attempt %d/%d failed (%s), retrying in %.1fs",
                        fn.__qualname__,
                        attempt,
                        max_attempts,
                        exc,
                        delay,
                    )
                    (sleep or time.sleep)(delay)
            raise last_exc  # type: ignore[misc]

        return wrapper

    return decorator
