# ABOUTME: Retry policy for batch callers of the wiki layer using tenacity
# ABOUTME: Retries transient transport failures with exponential backoff, never HTTP status errors

from collections.abc import Callable

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from lorekeeper.utils.logging import get_logger

logger = get_logger(__name__)

# Network-level failures only. A 404 or a malformed payload will not fix itself.
TRANSIENT_ERRORS: tuple[type[Exception], ...] = (httpx.TransportError,)


def _log_retry(retry_state: RetryCallState) -> None:
    exception = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Retrying after transient error",
        attempt=retry_state.attempt_number,
        error=str(exception),
        error_type=type(exception).__name__ if exception else None,
    )


def transport_retry(
    max_attempts: int = 3,
    min_wait: float = 0.5,
    max_wait: float = 8.0,
    multiplier: float = 1.0,
):
    """Retry an async callable on transient transport errors.

    The last error is re-raised once attempts are exhausted.
    """

    def decorator(func: Callable):
        async def wrapper(*args, **kwargs):
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(max_attempts),
                wait=wait_exponential(multiplier=multiplier, min=min_wait, max=max_wait),
                retry=retry_if_exception_type(TRANSIENT_ERRORS),
                before_sleep=_log_retry,
                reraise=True,
            ):
                with attempt:
                    return await func(*args, **kwargs)

        return wrapper

    return decorator
