"""
Calendar API error normalization and retry.

Two call sites with different needs:
- calendarList.list runs once per "all" search and its failure fails the
  whole request, so transient errors (quota, 5xx, dropped connections)
  are retried with exponential backoff.
- events.list runs once per calendar in parallel. A failing calendar is
  reported in calendars_failed rather than retried, so it uses
  max_attempts=1 and only gets its error normalized.

Either way callers see AlmanacError, never HttpError or socket errors.
"""

import json
import time
from functools import wraps
from typing import Any, TypeVar, Callable, ParamSpec

from logging_config import logger, log_retry
from models import AlmanacError, ErrorKind

T = TypeVar("T")
P = ParamSpec("P")


# Dropped or stalled connections (httplib2 raises these through the client)
RETRYABLE_EXCEPTIONS: tuple[type[Exception], ...] = (
    ConnectionError,
    TimeoutError,
)

# Statuses the Calendar API documents as "try again later"
RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({
    429,  # rateLimitExceeded (newer quota responses)
    500,  # backendError
    502,
    503,
    504,
})

# Calendar still reports most quota exhaustion as 403 with one of these reasons
QUOTA_REASONS: frozenset[str] = frozenset({
    "rateLimitExceeded",
    "userRateLimitExceeded",
    "quotaExceeded",
})

# Non-retryable statuses, phrased for a calendar search
_STATUS_KINDS: dict[int, ErrorKind] = {
    400: ErrorKind.INVALID_INPUT,      # e.g. bad timeMin, orderBy without singleEvents
    401: ErrorKind.AUTH_EXPIRED,       # token revoked or expired mid-request
    403: ErrorKind.PERMISSION_DENIED,  # calendar not shared with this account
    404: ErrorKind.NOT_FOUND,          # calendar deleted or ID mistyped
}


def _get_http_status(exception: Exception) -> int | None:
    """
    HTTP status of a failed Calendar API call, if the exception carries one.

    googleapiclient's HttpError exposes it as resp.status; status_code
    covers other HTTP clients.
    """
    resp = getattr(exception, "resp", None)
    status = getattr(resp, "status", None)
    if isinstance(status, int):
        return status

    status = getattr(exception, "status_code", None)
    if isinstance(status, int):
        return status

    return None


def _get_error_reasons(exception: Exception) -> set[str]:
    """
    The `reason` codes from a Calendar API error body.

    Reads HttpError.error_details when the client parsed it, otherwise the
    raw JSON content. Anything unparseable yields no reasons.
    """
    details = getattr(exception, "error_details", None)
    if isinstance(details, list):
        return {d["reason"] for d in details if isinstance(d, dict) and "reason" in d}

    content = getattr(exception, "content", None)
    if not isinstance(content, (bytes, str)):
        return set()
    try:
        body: Any = json.loads(content)
    except ValueError:
        return set()
    errors = body.get("error", {}).get("errors", []) if isinstance(body, dict) else []
    return {e["reason"] for e in errors if isinstance(e, dict) and "reason" in e}


def _is_quota_error(exception: Exception, status: int | None) -> bool:
    return status == 403 and bool(_get_error_reasons(exception) & QUOTA_REASONS)


def _should_retry(exception: Exception) -> bool:
    """Whether another attempt could plausibly succeed."""
    if isinstance(exception, AlmanacError):
        return exception.retryable

    if isinstance(exception, RETRYABLE_EXCEPTIONS):
        return True

    status = _get_http_status(exception)
    if status in RETRYABLE_STATUS_CODES:
        return True
    return _is_quota_error(exception, status)


def _convert_to_almanac_error(exception: Exception) -> AlmanacError:
    """Map a Calendar API or transport failure onto an ErrorKind."""
    if isinstance(exception, AlmanacError):
        return exception

    message = str(exception)
    status = _get_http_status(exception)

    if status == 429 or _is_quota_error(exception, status):
        return AlmanacError(ErrorKind.RATE_LIMITED, message, retryable=True)
    if status in _STATUS_KINDS:
        return AlmanacError(_STATUS_KINDS[status], message)
    if status is not None and status >= 500:
        return AlmanacError(ErrorKind.NETWORK_ERROR, message, retryable=True)

    if isinstance(exception, TimeoutError):
        return AlmanacError(ErrorKind.TIMEOUT, message or "Calendar API request timed out", retryable=True)
    if isinstance(exception, ConnectionError):
        return AlmanacError(ErrorKind.NETWORK_ERROR, message, retryable=True)

    return AlmanacError(ErrorKind.UNKNOWN, message)


def with_retry(
    max_attempts: int = 3,
    delay_ms: int = 1000,
    backoff_multiplier: float = 2.0,
    convert_errors: bool = True,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Retry a Calendar API call with exponential backoff.

    Args:
        max_attempts: Total attempts; 1 means normalize errors only
        delay_ms: Wait before the second attempt
        backoff_multiplier: Growth of the wait per further attempt
        convert_errors: Raise AlmanacError instead of the original exception

    Example:
        @with_retry(max_attempts=3, delay_ms=1000)
        def list_calendars(credentials):
            ...
    """

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            if max_attempts < 1:
                raise ValueError("max_attempts must be at least 1")

            for attempt in range(max_attempts):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    final = attempt == max_attempts - 1
                    if final or not _should_retry(e):
                        logger.debug(f"{func.__name__} gave up after {attempt + 1} attempt(s): {e}")
                        if convert_errors:
                            raise _convert_to_almanac_error(e) from e
                        raise

                    wait_ms = int(delay_ms * (backoff_multiplier ** attempt))
                    log_retry(attempt + 1, max_attempts, wait_ms, str(e))
                    time.sleep(wait_ms / 1000)

            raise AssertionError("unreachable")

        return wrapper

    return decorator
