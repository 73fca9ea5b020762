"""Tests for the transactional unit of work and its serialization retry."""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import DBAPIError

from ledger.data.transaction import run_in_transaction, run_operation
from ledger.exceptions import ErrorKind
from ledger.models.account import AccountStatus, PaymentFrequency
from ledger.models.db import CurrentAccountRecord
from ledger.models.results import ActionResult


class _DriverError(Exception):
    def __init__(self, message: str, sqlstate: str | None = None):
        super().__init__(message)
        self.sqlstate = sqlstate


def _db_error(message: str, sqlstate: str | None = None) -> DBAPIError:
    return DBAPIError("UPDATE current_accounts", {}, _DriverError(message, sqlstate))


def _account() -> CurrentAccountRecord:
    return CurrentAccountRecord(
        organization_id="org-a",
        total_amount=Decimal("1000"),
        down_payment=Decimal("0"),
        number_of_installments=1,
        payment_frequency=PaymentFrequency.MONTHLY,
        start_date=date(2025, 1, 31),
        remaining_amount=Decimal("1000"),
        installment_amount=Decimal("1000"),
        status=AccountStatus.ACTIVE,
    )


def _flaky_work(failures: int, error: DBAPIError):
    """Adds an account, then fails with `error` on the first `failures` attempts."""
    calls = []

    async def work(session):
        calls.append(1)
        session.add(_account())
        await session.flush()
        if len(calls) <= failures:
            raise error
        return ActionResult.ok("hecho")

    return work, calls


async def _account_count(session_factory) -> int:
    async with session_factory() as session:
        return (await session.execute(select(func.count()).select_from(CurrentAccountRecord))).scalar_one()


class TestSerializationRetry:
    async def test_retries_serialization_failure(self, session_factory):
        work, calls = _flaky_work(1, _db_error("could not serialize access", "40001"))
        result = await run_in_transaction(session_factory, work, attempts=3)
        assert result.success
        assert len(calls) == 2
        assert await _account_count(session_factory) == 1

    async def test_retries_deadlock(self, session_factory):
        work, calls = _flaky_work(2, _db_error("deadlock detected", "40P01"))
        await run_in_transaction(session_factory, work, attempts=3)
        assert len(calls) == 3
        assert await _account_count(session_factory) == 1

    async def test_retries_locked_sqlite(self, session_factory):
        work, calls = _flaky_work(1, _db_error("database is locked"))
        await run_in_transaction(session_factory, work, attempts=2)
        assert len(calls) == 2

    async def test_gives_up_after_attempts(self, session_factory):
        work, calls = _flaky_work(10, _db_error("could not serialize access", "40001"))
        with pytest.raises(DBAPIError):
            await run_in_transaction(session_factory, work, attempts=3)
        assert len(calls) == 3
        assert await _account_count(session_factory) == 0

    async def test_other_database_errors_are_not_retried(self, session_factory):
        work, calls = _flaky_work(1, _db_error("value too long", "22001"))
        with pytest.raises(DBAPIError):
            await run_in_transaction(session_factory, work, attempts=3)
        assert len(calls) == 1
        assert await _account_count(session_factory) == 0


class TestRunOperation:
    async def test_exhausted_retries_report_persistence(self, session_factory):
        work, calls = _flaky_work(10, _db_error("could not serialize access", "40001"))
        result = await run_operation("recordPayment", session_factory, work)
        assert not result.success
        assert result.kind == ErrorKind.PERSISTENCE
        assert result.message.startswith("Error de base de datos en recordPayment.")
        assert len(calls) == 3

    async def test_unexpected_error_is_unknown(self, session_factory):
        async def work(session):
            raise RuntimeError("boom")

        result = await run_operation("undoPayment", session_factory, work)
        assert result.kind == ErrorKind.UNKNOWN
        assert "boom" not in result.message
