"""Retry policy for store operations.

Transient failures (lost connections, serialization failures, deadlocks,
exhausted pools) are retried with exponential backoff. Anything else,
including constraint violations and SQL errors, is raised on the first
failure. Task cancellation is never retried.
"""

import logfire
from sqlalchemy import exc
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from commenttree.config import RetrySettings

# SQLSTATE codes worth another attempt
TRANSIENT_SQLSTATES = frozenset(
    {
        "40001",  # serialization_failure
        "40P01",  # deadlock_detected
        "53300",  # too_many_connections
        "57P01",  # admin_shutdown
    }
)
# Class 08: connection exceptions
TRANSIENT_SQLSTATE_CLASSES = ("08",)


def _sqlstate(error: exc.DBAPIError) -> str | None:
    orig = error.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def is_transient(error: BaseException) -> bool:
    """Whether a failed store call may succeed if tried again."""
    if isinstance(error, (exc.TimeoutError, exc.DisconnectionError)):
        return True
    if isinstance(error, exc.DBAPIError):
        if error.connection_invalidated:
            return True
        sqlstate = _sqlstate(error)
        if sqlstate:
            return sqlstate in TRANSIENT_SQLSTATES or sqlstate.startswith(
                TRANSIENT_SQLSTATE_CLASSES
            )
        return isinstance(error, exc.OperationalError)
    return isinstance(error, (ConnectionError, TimeoutError))


def _log_retry(operation: str):
    def before_sleep(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logfire.warn(
            "Transient store error, retrying",
            operation=operation,
            attempt=retry_state.attempt_number,
            wait=retry_state.next_action.sleep if retry_state.next_action else None,
            error=str(error),
        )

    return before_sleep


def retrying(strategy: RetrySettings, operation: str) -> AsyncRetrying:
    """Build the retry controller for one store operation.

    Usage:
        result = await retrying(settings.retry_strategy, "insert")(do_insert)

    Args:
        strategy: Attempts, first delay and backoff factor
        operation: Operation name for the logs

    Returns:
        Callable retry controller; the last error is re-raised unchanged
    """
    return AsyncRetrying(
        stop=stop_after_attempt(max(strategy.attempts, 1)),
        wait=wait_exponential(multiplier=strategy.delay, exp_base=strategy.backoff),
        retry=retry_if_exception(is_transient),
        before_sleep=_log_retry(operation),
        reraise=True,
    )
