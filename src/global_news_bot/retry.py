"""
Simple retry helper for network calls.
Timeouts are enforced by the HTTP client (requests timeout=...), not here.
"""

import time
from typing import Callable, Tuple, Type, TypeVar

T = TypeVar("T")


def call_with_retry(
    func: Callable[[], T],
    *,
    max_attempts: int = 2,
    delay: float = 2.0,
    context: str = "operation",
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call func until it succeeds or max_attempts is reached; the last error is re-raised."""
    attempts = max(1, max_attempts)
    for attempt in range(1, attempts + 1):
        try:
            return func()
        except retry_on as e:
            if attempt == attempts:
                raise
            print(f"  🔁 {context} failed ({e}), retrying in {delay:g}s (attempt {attempt}/{attempts})")
            sleep(delay)
    raise RuntimeError("unreachable")
