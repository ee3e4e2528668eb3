"""
Inkwell Backend — Database Retry Unit Tests
=============================================

What:  Tests for run_with_retry and the transient-error classification.
How:   Mock sessions and AsyncMock operations; no real database.

What we test:
    ✅ Transient failures are retried and the session rolled back each time
    ✅ Exhausted retries surface as DatabaseError
    ✅ Constraint violations surface as ConflictError without retrying
    ✅ Non-transient DB errors are not retried
    ✅ The backoff policy raises no deprecation warnings
"""

import warnings
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, ProgrammingError

from app.config import settings
from app.database import is_transient_error, run_with_retry
from app.exceptions import ConflictError, DatabaseError


def operational_error() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("server closed the connection"))


def integrity_error() -> IntegrityError:
    return IntegrityError("INSERT INTO posts", {}, Exception("FOREIGN KEY constraint failed"))


class TestTransientClassification:

    def test_operational_error_is_transient(self):
        assert is_transient_error(operational_error())

    def test_integrity_error_is_not_transient(self):
        assert not is_transient_error(integrity_error())

    def test_invalidated_connection_is_transient(self):
        exc = DBAPIError("SELECT 1", {}, Exception("reset"), connection_invalidated=True)
        assert is_transient_error(exc)

    def test_programming_error_is_not_transient(self):
        assert not is_transient_error(ProgrammingError("SELEC 1", {}, Exception("syntax")))

    def test_non_database_error_is_not_transient(self):
        assert not is_transient_error(ValueError("nope"))


class TestRunWithRetry:

    @pytest.mark.asyncio
    async def test_success_on_first_attempt(self, mock_db_session):
        operation = AsyncMock(return_value="row")

        result = await run_with_retry(mock_db_session, operation, "get post 1")

        assert result == "row"
        operation.assert_awaited_once()
        mock_db_session.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_transient_failure_then_success(self, mock_db_session):
        operation = AsyncMock(side_effect=[operational_error(), operational_error(), "row"])

        result = await run_with_retry(mock_db_session, operation, "get post 1")

        assert result == "row"
        assert operation.await_count == 3
        assert mock_db_session.rollback.await_count == 2

    @pytest.mark.asyncio
    async def test_exhausted_retries_raise_database_error(self, mock_db_session):
        operation = AsyncMock(side_effect=operational_error())

        with pytest.raises(DatabaseError) as exc_info:
            await run_with_retry(mock_db_session, operation, "query post")

        assert operation.await_count == settings.retry_max_attempts
        assert exc_info.value.context["operation"] == "query post"
        assert isinstance(exc_info.value.__cause__, OperationalError)

    @pytest.mark.asyncio
    async def test_integrity_error_becomes_conflict(self, mock_db_session):
        operation = AsyncMock(side_effect=integrity_error())

        with pytest.raises(ConflictError):
            await run_with_retry(mock_db_session, operation, "create post")

        operation.assert_awaited_once()
        mock_db_session.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_programming_error_not_retried(self, mock_db_session):
        operation = AsyncMock(side_effect=ProgrammingError("SELEC", {}, Exception("syntax")))

        with pytest.raises(DatabaseError):
            await run_with_retry(mock_db_session, operation, "query post")

        operation.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_application_errors_pass_through(self, mock_db_session):
        operation = AsyncMock(side_effect=KeyError("id"))

        with pytest.raises(KeyError):
            await run_with_retry(mock_db_session, operation, "get post 1")

        operation.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_backoff_emits_no_deprecation_warning(self, mock_db_session):
        operation = AsyncMock(side_effect=[operational_error(), "row"])

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            assert await run_with_retry(mock_db_session, operation, "get post 1") == "row"

        assert not [w for w in caught if issubclass(w.category, DeprecationWarning)]
