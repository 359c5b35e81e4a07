"""Transient-failure classification and exponential backoff for provider calls."""

import errno
import time
from collections.abc import Callable
from typing import TypeVar

import httpx
import openai

from docdiff.logging.logger import Log

T = TypeVar("T")

TRANSIENT_STATUS_CODES = frozenset({429, 502, 503, 504})
TRANSIENT_ERRNOS = frozenset({errno.ECONNRESET, errno.ETIMEDOUT, errno.ECONNABORTED})
TRANSIENT_MESSAGE_SIGNALS = (
    "429",
    "502",
    "503",
    "504",
    "too many requests",
    "bad gateway",
    "service unavailable",
    "gateway timeout",
    "socket hang up",
    "connection reset",
    "econnreset",
    "etimedout",
    "econnaborted",
    "overloaded",
    "resource exhausted",
    "resource_exhausted",
    "rate limit",
    "timed out",
    "timeout",
)
# Timeouts rarely carry an errno or a status code.
TRANSIENT_EXCEPTION_TYPES = (TimeoutError, httpx.TimeoutException, openai.APITimeoutError)


def is_transient(exc: BaseException) -> bool:
    """Return True if the error is likely to succeed on retry.

    Inspects the exception and every exception in its ``__cause__`` chain:
    timeout exception types, message substrings (case-insensitive),
    HTTP-like ``status_code``/``code`` attributes and socket ``errno`` values.
    """
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if _has_transient_signal(current):
            return True
        current = current.__cause__
    return False


def _has_transient_signal(exc: BaseException) -> bool:
    if isinstance(exc, TRANSIENT_EXCEPTION_TYPES):
        return True
    for attr in ("status_code", "code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and value in TRANSIENT_STATUS_CODES:
            return True
        if isinstance(value, str) and value.lower() in TRANSIENT_MESSAGE_SIGNALS:
            return True
    if getattr(exc, "errno", None) in TRANSIENT_ERRNOS:
        return True
    message = str(exc).lower()
    return any(signal in message for signal in TRANSIENT_MESSAGE_SIGNALS)


class RetryPolicy:
    """Retry a zero-argument operation on transient failures.

    Delays are ``base_delay_seconds * 2 ** attempt``: with the defaults the
    waits are 2s, 4s and 8s, 14s in the worst case before the last error
    surfaces.
    """

    def __init__(self, max_retries: int = 3, base_delay_seconds: float = 2.0) -> None:
        self._max_retries = max(0, max_retries)
        self._base_delay_seconds = base_delay_seconds

    @property
    def max_retries(self) -> int:
        return self._max_retries

    def call(self, operation: Callable[[], T]) -> T:
        """Run the operation, retrying transient failures.

        Non-transient errors and the final attempt's error propagate
        unchanged and without further delay.
        """
        attempt = 0
        while True:
            try:
                return operation()
            except Exception as exc:
                if attempt >= self._max_retries or not is_transient(exc):
                    raise
                delay = self._base_delay_seconds * 2**attempt
                Log.warning(
                    f"Provider call failed, retrying in {delay:g}s "
                    f"(attempt {attempt + 1}/{self._max_retries + 1}): {exc}"
                )
                time.sleep(delay)
                attempt += 1
