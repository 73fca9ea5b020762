"""Opening current accounts and reading them back with their plan and ledger."""

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ledger.data.repository import LedgerRepository
from ledger.data.transaction import run_operation
from ledger.engine.amortization import schedule_summary
from ledger.engine.periods import due_date
from ledger.exceptions import AccountNotFoundError, LedgerError
from ledger.models.account import AccountStatus
from ledger.models.db import CurrentAccountRecord
from ledger.models.requests import AccountInput, AccountListInput, parse_input
from ledger.models.results import ActionResult

logger = logging.getLogger(__name__)


async def create_account(
    session_factory: async_sessionmaker[AsyncSession],
    organization_id: str,
    **fields,
) -> ActionResult:
    """Open a financed-sale account. The first installment falls on the start date."""
    try:
        terms = parse_input(AccountInput, **fields)
    except LedgerError as e:
        logger.warning("createAccount rejected [%s]: %s", e.code, e.message)
        return ActionResult.failure(e)

    principal = terms.total_amount - terms.down_payment
    summary = schedule_summary(
        principal, terms.interest_rate, terms.number_of_installments, terms.payment_frequency
    )
    computed = summary.entries[0].calculated_installment_amount if summary.entries else principal
    installment_amount = terms.installment_amount or computed
    if terms.installment_amount is not None and terms.installment_amount != computed:
        logger.warning(
            "Supplied installment amount %s differs from the computed plan amount %s",
            terms.installment_amount, computed,
        )

    async def work(session: AsyncSession) -> ActionResult:
        account = CurrentAccountRecord(
            organization_id=organization_id,
            total_amount=terms.total_amount,
            down_payment=terms.down_payment,
            number_of_installments=terms.number_of_installments,
            interest_rate=terms.interest_rate,
            payment_frequency=terms.payment_frequency,
            start_date=terms.start_date,
            remaining_amount=principal,
            installment_amount=installment_amount,
            next_due_date=due_date(
                terms.start_date, terms.payment_frequency, 0, terms.number_of_installments
            ),
            status=AccountStatus.ACTIVE if principal > 0 else AccountStatus.PAID_OFF,
            notes=terms.notes,
        )
        session.add(account)
        await session.flush()
        logger.info(
            "Account %s opened for organization %s: principal %s over %d %s installments of %s",
            account.id, organization_id, principal, terms.number_of_installments,
            terms.payment_frequency.value, installment_amount,
        )
        return ActionResult.ok(
            "Cuenta corriente creada exitosamente.",
            account_id=str(account.id),
            installment_amount=installment_amount,
            remaining_amount=principal,
            next_due_date=account.next_due_date,
        )

    return await run_operation("createAccount", session_factory, work)


async def get_account_details(
    session_factory: async_sessionmaker[AsyncSession],
    organization_id: str,
    account_id: uuid.UUID,
) -> ActionResult:
    """Account state, original amortization plan and ledger rows."""

    async def work(session: AsyncSession) -> ActionResult:
        repo = LedgerRepository(session, organization_id)
        account = await repo.get_account(account_id)
        if account is None:
            raise AccountNotFoundError()
        payments = await repo.list_payments(account.id)
        terms = account.terms()
        summary = schedule_summary(
            terms.financial_principal, terms.annual_rate,
            account.number_of_installments, account.payment_frequency,
        )
        return ActionResult.ok(
            "Cuenta corriente obtenida.",
            account=account,
            payments=payments,
            schedule=summary,
        )

    return await run_operation("getAccountDetails", session_factory, work)


async def list_accounts(
    session_factory: async_sessionmaker[AsyncSession],
    organization_id: str,
    status: AccountStatus | str | None = None,
    page: int = 1,
    page_size: int = 10,
) -> ActionResult:
    """Page through the organization's accounts, newest first, optionally by status."""
    try:
        query = parse_input(AccountListInput, status=status, page=page, page_size=page_size)
    except LedgerError as e:
        logger.warning("getCurrentAccounts rejected [%s]: %s", e.code, e.message)
        return ActionResult.failure(e)

    async def work(session: AsyncSession) -> ActionResult:
        repo = LedgerRepository(session, organization_id)
        accounts, total = await repo.list_accounts(query.status, query.page_size, query.offset)
        return ActionResult.ok(
            "Cuentas corrientes obtenidas.",
            accounts=accounts,
            total_count=total,
            page=query.page,
            page_size=query.page_size,
        )

    return await run_operation("getCurrentAccounts", session_factory, work)
