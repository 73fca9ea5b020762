"""Transactional unit of work and the operation boundary.

run_in_transaction executes one all-or-nothing unit on a serializable
connection, retrying when the database aborts it for a serialization
conflict. run_operation turns every outcome into an ActionResult.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ledger.config import settings
from ledger.exceptions import LedgerError, PersistenceError, UnknownError
from ledger.models.results import ActionResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE_SQLSTATES = {"40001", "40P01"}  # serialization_failure, deadlock_detected


def _is_serialization_failure(exc: DBAPIError) -> bool:
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate in RETRYABLE_SQLSTATES:
        return True
    return "database is locked" in str(orig)


async def run_in_transaction(
    session_factory: async_sessionmaker[AsyncSession],
    work: Callable[[AsyncSession], Awaitable[T]],
    attempts: int | None = None,
) -> T:
    """Run work inside one transaction; commit on return, roll back on any exception."""
    attempts = attempts or settings.serialization_retries
    for attempt in range(1, attempts + 1):
        async with session_factory() as session:
            try:
                async with session.begin():
                    return await work(session)
            except DBAPIError as e:
                if attempt < attempts and _is_serialization_failure(e):
                    logger.warning(
                        "Serialization conflict, retrying transaction (attempt %d/%d)", attempt, attempts
                    )
                    continue
                raise
    raise PersistenceError("La transacción no pudo completarse.")


async def run_operation(
    name: str,
    session_factory: async_sessionmaker[AsyncSession],
    work: Callable[[AsyncSession], Awaitable[ActionResult]],
) -> ActionResult:
    """Execute a ledger operation and report its outcome as a typed result."""
    try:
        return await run_in_transaction(session_factory, work)
    except LedgerError as e:
        logger.warning("%s rejected [%s]: %s", name, e.code, e.message)
        return ActionResult.failure(e)
    except SQLAlchemyError as e:
        logger.error("%s failed with a database error", name, exc_info=True)
        code = getattr(e, "code", None)
        detail = f" Código: {code}" if code else ""
        return ActionResult.failure(PersistenceError(f"Error de base de datos en {name}.{detail}"))
    except Exception:
        logger.exception("%s failed unexpectedly", name)
        return ActionResult.failure(UnknownError())
