"""
Bounded-concurrency fan-out used by the cascading order delete.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Iterable, Optional, TypeVar

from orders_api.handlers.utils.observability import logger

T = TypeVar('T')

# Stop starting sub-deletes once the invocation has less time left than this
CANCEL_MARGIN_MS = 1000


class CascadeCancelledError(Exception):
    """Raised for sub-deletes that were not started because the request was cancelled."""


def run_bounded(
    keys: Iterable[T],
    operation: Callable[[T], None],
    max_in_flight: int,
    is_cancelled: Optional[Callable[[], bool]] = None,
) -> int:
    """
    Run ``operation`` for every key with at most ``max_in_flight`` calls at once.

    All calls are joined before returning. The first failure observed is re-raised
    unchanged once every call has finished; there is no rollback of the calls that
    succeeded. ``is_cancelled`` is checked before each call starts, calls already
    running are left to complete.

    Args:
        keys: Keys to process
        operation: Callable invoked once per key
        max_in_flight: Upper bound on concurrent calls
        is_cancelled: Optional cancellation check shared by all calls

    Returns:
        Number of keys processed

    Raises:
        Exception: The first error raised by ``operation`` or CascadeCancelledError
    """
    keys = list(keys)
    if not keys:
        return 0

    def _guarded(key: T) -> None:
        if is_cancelled is not None and is_cancelled():
            raise CascadeCancelledError(f'cancelled before processing {key}')
        operation(key)

    first_error: Optional[BaseException] = None
    failures = 0
    with ThreadPoolExecutor(max_workers=max_in_flight) as executor:
        futures = [executor.submit(_guarded, key) for key in keys]
        for future in as_completed(futures):
            error = future.exception()
            if error is None:
                continue
            failures += 1
            if first_error is None:
                first_error = error

    if first_error is not None:
        logger.warning("Bounded fan-out finished with failures", extra={
            "total": len(keys),
            "failed": failures,
            "first_error": str(first_error),
        })
        raise first_error

    return len(keys)


def deadline_check(lambda_context) -> Optional[Callable[[], bool]]:
    """
    Build a cancellation check from a Lambda context's remaining time.

    Returns None when there is no context to read a deadline from (local listener).
    """
    get_remaining = getattr(lambda_context, 'get_remaining_time_in_millis', None)
    if get_remaining is None:
        return None
    return lambda: get_remaining() < CANCEL_MARGIN_MS
