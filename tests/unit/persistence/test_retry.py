"""Unit tests for the store retry policy."""

import asyncio

import pytest
from sqlalchemy import exc

from commenttree.config import RetrySettings
from commenttree.persistence.retry import is_transient, retrying

NO_WAIT = RetrySettings(attempts=3, delay=0, backoff=2.0)


class FakePgError(Exception):
    """DBAPI error carrying a SQLSTATE, like asyncpg's."""

    def __init__(self, sqlstate: str):
        super().__init__(f"sqlstate {sqlstate}")
        self.sqlstate = sqlstate


def dbapi_error(cls, sqlstate: str | None = None):
    orig = FakePgError(sqlstate) if sqlstate else Exception("boom")
    return cls("SELECT 1", {}, orig)


class TestIsTransient:
    @pytest.mark.parametrize(
        "error",
        [
            dbapi_error(exc.OperationalError),
            dbapi_error(exc.DBAPIError, "40001"),
            dbapi_error(exc.DBAPIError, "40P01"),
            dbapi_error(exc.DBAPIError, "08006"),
            dbapi_error(exc.DBAPIError, "57P01"),
            exc.TimeoutError("pool exhausted"),
            ConnectionResetError(),
            TimeoutError(),
        ],
    )
    def test_transient(self, error):
        assert is_transient(error)

    @pytest.mark.parametrize(
        "error",
        [
            dbapi_error(exc.IntegrityError, "23505"),
            dbapi_error(exc.ProgrammingError, "42P01"),
            dbapi_error(exc.IntegrityError),
            ValueError("bad"),
        ],
    )
    def test_permanent(self, error):
        assert not is_transient(error)

    def test_cancellation_is_not_transient(self):
        assert not is_transient(asyncio.CancelledError())


class TestRetrying:
    @pytest.mark.asyncio
    async def test_succeeds_after_transient_failures(self):
        """Transient errors are retried until an attempt succeeds."""
        calls = 0

        async def flaky():
            nonlocal calls
            calls += 1
            if calls < 3:
                raise dbapi_error(exc.OperationalError)
            return "ok"

        assert await retrying(NO_WAIT, "test.flaky")(flaky) == "ok"
        assert calls == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_attempts(self):
        """The last transient error is re-raised unchanged."""
        calls = 0

        async def down():
            nonlocal calls
            calls += 1
            raise dbapi_error(exc.OperationalError)

        with pytest.raises(exc.OperationalError):
            await retrying(NO_WAIT, "test.down")(down)
        assert calls == NO_WAIT.attempts

    @pytest.mark.asyncio
    async def test_permanent_errors_are_not_retried(self):
        calls = 0

        async def broken():
            nonlocal calls
            calls += 1
            raise dbapi_error(exc.IntegrityError, "23505")

        with pytest.raises(exc.IntegrityError):
            await retrying(NO_WAIT, "test.broken")(broken)
        assert calls == 1

    @pytest.mark.asyncio
    async def test_zero_attempts_still_runs_once(self):
        calls = 0

        async def once():
            nonlocal calls
            calls += 1
            return calls

        assert await retrying(RetrySettings(attempts=0, delay=0), "test.once")(once) == 1
