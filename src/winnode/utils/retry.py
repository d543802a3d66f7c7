# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/winnode/utils/retry.py

import time
import functools
from typing import Callable

class RetryError(RuntimeError):
    pass


def retry(
    *,
    retries: int,
    delay: int,
    retry_on: tuple[type[Exception], ...] = (Exception,),
    transient: Callable[[Exception], bool] | None = None,
    on_retry: Callable[[int, Exception], None] | None = None,
):
    """
    Retry decorator for idempotent reads against the cluster API.

    retries: number of attempts
    delay: seconds between attempts
    retry_on: exception types to retry
    transient: predicate; an exception it rejects is re-raised at once
    on_retry: callback(attempt, exception)

    Raises RetryError, chained to the last failure, once attempts run out.
    """

    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            last_exc = None
            for attempt in range(1, retries + 1):
                try:
                    return fn(*args, **kwargs)
                except retry_on as exc:
                    if transient is not None and not transient(exc):
                        raise
                    last_exc = exc
                    if on_retry:
                        on_retry(attempt, exc)
                    if attempt == retries:
                        break
                    time.sleep(delay)
            raise RetryError(f"{fn.__name__} failed after {retries} attempts") from last_exc
        return wrapper
    return decorator
