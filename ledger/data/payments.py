"""Recording a payment against a current account.

One transaction: resolve the installment slot, write the ledger row, then
rewrite the account's balance, installment amount, due date and status
from the payment split.
"""

import logging
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ledger.data.repository import LedgerRepository
from ledger.data.transaction import run_operation
from ledger.engine.numbering import resolve_installment_number
from ledger.engine.periods import next_due_date
from ledger.engine.splitter import split_payment
from ledger.exceptions import AccountNotFoundError, AccountPaidOffError, LedgerError
from ledger.models.account import AccountStatus
from ledger.models.db import PaymentRecord
from ledger.models.requests import PaymentInput, parse_input
from ledger.models.results import ActionResult

logger = logging.getLogger(__name__)


async def record_payment(
    session_factory: async_sessionmaker[AsyncSession],
    organization_id: str,
    account_id,
    amount_paid,
    payment_date: date | None = None,
    payment_method: str | None = None,
    transaction_reference: str | None = None,
    notes: str | None = None,
    installment_number: int | None = None,
    surplus_action: str | None = None,
) -> ActionResult:
    try:
        payment = parse_input(
            PaymentInput,
            account_id=account_id,
            amount_paid=amount_paid,
            payment_date=payment_date,
            payment_method=payment_method,
            transaction_reference=transaction_reference,
            notes=notes,
            installment_number=installment_number,
            surplus_action=surplus_action,
        )
    except LedgerError as e:
        logger.warning("recordPayment rejected [%s]: %s", e.code, e.message)
        return ActionResult.failure(e)

    async def work(session: AsyncSession) -> ActionResult:
        return await _apply_payment(LedgerRepository(session, organization_id), payment)

    return await run_operation("recordPayment", session_factory, work)


async def _apply_payment(repo: LedgerRepository, payment: PaymentInput) -> ActionResult:
    account = await repo.get_account(payment.account_id, for_update=True)
    if account is None:
        raise AccountNotFoundError()
    if account.status == AccountStatus.PAID_OFF:
        raise AccountPaidOffError()

    consumed = await repo.count_consumed(account.id)
    paid_numbers = await repo.paid_installment_numbers(account.id)
    number = resolve_installment_number(
        payment.installment_number, account.number_of_installments, consumed, paid_numbers
    )

    split = split_payment(account.terms(), number, payment.amount_paid, payment.surplus_policy)
    paid_on = payment.payment_date or date.today()

    # A reversal leaves a pending placeholder on the slot; paying it fills that row.
    record = await repo.find_pending_placeholder(account.id, number)
    if record is not None:
        record.amount_paid = payment.amount_paid
        record.payment_date = paid_on
        record.payment_method = payment.payment_method
        record.transaction_reference = payment.transaction_reference
        record.notes = payment.notes
        await repo.session.flush()
    else:
        record = PaymentRecord(
            current_account_id=account.id,
            organization_id=repo.organization_id,
            amount_paid=payment.amount_paid,
            payment_date=paid_on,
            payment_method=payment.payment_method,
            transaction_reference=payment.transaction_reference,
            notes=payment.notes,
            installment_number=number,
            installment_version=None,
        )
        await repo.add(record)

    consumed = await repo.count_consumed(account.id)
    pending = await repo.pending_installment_numbers(account.id)

    account.remaining_amount = split.new_balance
    account.installment_amount = split.installment_amount
    account.status = split.status
    account.next_due_date = (
        None if split.status == AccountStatus.PAID_OFF
        else next_due_date(
            account.start_date, account.payment_frequency, consumed,
            account.number_of_installments, pending,
        )
    )
    await repo.session.flush()

    logger.info(
        "Payment %s recorded on account %s: installment %d, amount %s, interest %s, amortization %s, balance %s%s",
        record.id, account.id, number, split.amount_paid, split.interest_component,
        split.amortization_component, split.new_balance,
        " (surplus)" if split.has_surplus else "",
    )
    return ActionResult.ok(
        "Pago registrado exitosamente.",
        payment_id=str(record.id),
        installment_number=number,
        interest_component=split.interest_component,
        amortization_component=split.amortization_component,
        remaining_amount=split.new_balance,
        installment_amount=split.installment_amount,
        next_due_date=account.next_due_date,
        status=split.status.value,
    )
