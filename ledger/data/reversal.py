"""Undoing a payment with compensating D/H entries.

The original row is flagged D in place, an H mirror and a fresh pending
placeholder for the same installment are appended, and the annulled amount
is added back to the account's debt. Nothing is deleted.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ledger.data.repository import LedgerRepository
from ledger.data.transaction import run_operation
from ledger.engine.amortization import recalculated_installment
from ledger.engine.periods import next_due_date
from ledger.exceptions import (
    AlreadyAnnulledError,
    LedgerError,
    MissingAccountError,
    MissingAccountIdError,
    PaymentNotFoundError,
    PendingPaymentError,
)
from ledger.models.account import AccountStatus
from ledger.models.db import PaymentRecord
from ledger.models.payment import InstallmentVersion, PaymentState
from ledger.models.requests import UndoInput, parse_input
from ledger.models.results import ActionResult

logger = logging.getLogger(__name__)

ANNULMENT_SUFFIX = " (Anulación H)"


async def undo_payment(
    session_factory: async_sessionmaker[AsyncSession],
    organization_id: str,
    payment_id,
) -> ActionResult:
    try:
        request = parse_input(UndoInput, payment_id=payment_id)
    except LedgerError as e:
        logger.warning("undoPayment rejected [%s]: %s", e.code, e.message)
        return ActionResult.failure(e)

    async def work(session: AsyncSession) -> ActionResult:
        return await _annul(LedgerRepository(session, organization_id), request)

    return await run_operation("undoPayment", session_factory, work)


async def _annul(repo: LedgerRepository, request: UndoInput) -> ActionResult:
    original = await repo.get_payment(request.payment_id)
    if original is None:
        raise PaymentNotFoundError(f"Pago {request.payment_id} no encontrado.")

    state = original.state
    if state.is_annulment_entry:
        raise AlreadyAnnulledError(f"El pago {original.id} ya forma parte de una anulación.")
    if state == PaymentState.SCHEDULED:
        raise PendingPaymentError()
    if original.current_account_id is None:
        raise MissingAccountIdError()
    if original.current_account is None:
        raise MissingAccountError()

    account = await repo.get_account(original.current_account_id, for_update=True)
    if account is None:
        raise MissingAccountError()

    original.installment_version = InstallmentVersion.DEBE.value

    mirror = PaymentRecord(
        current_account_id=original.current_account_id,
        organization_id=original.organization_id,
        amount_paid=original.amount_paid,
        payment_date=original.payment_date,
        payment_method=original.payment_method,
        transaction_reference=original.transaction_reference,
        notes=(
            f"{original.notes}{ANNULMENT_SUFFIX}" if original.notes
            else f"Asiento H por anulación de pago {original.id}"
        ),
        installment_number=original.installment_number,
        installment_version=InstallmentVersion.HABER.value,
    )
    pending = PaymentRecord(
        current_account_id=original.current_account_id,
        organization_id=original.organization_id,
        amount_paid=original.amount_paid,
        payment_date=None,
        payment_method=None,
        transaction_reference=None,
        notes=f"Cuota pendiente tras anulación de pago {original.id}.",
        installment_number=original.installment_number,
        installment_version=None,
    )
    await repo.add(mirror)
    await repo.add(pending)

    # Reversal is purely additive to principal, however the payment had been split.
    account.remaining_amount = account.remaining_amount + original.amount_paid

    consumed = await repo.count_consumed(account.id)
    remaining_installments = max(0, account.number_of_installments - consumed)
    if remaining_installments > 0:
        account.installment_amount = recalculated_installment(
            account.remaining_amount,
            account.interest_rate,
            remaining_installments,
            account.payment_frequency,
        )

    if account.remaining_amount > 0:
        account.status = AccountStatus.ACTIVE
        account.next_due_date = next_due_date(
            account.start_date, account.payment_frequency, consumed,
            account.number_of_installments, await repo.pending_installment_numbers(account.id),
        )
    await repo.session.flush()

    logger.info(
        "Payment %s annulled (installment %d): H entry %s, pending %s, account %s balance %s",
        original.id, original.installment_number, mirror.id, pending.id,
        account.id, account.remaining_amount,
    )
    return ActionResult.ok(
        f"Anulación procesada para pago {original.id} (asientos D/H generados). "
        "Saldo de cuenta corriente actualizado.",
        payment_id=str(original.id),
        compensating_payment_id=str(mirror.id),
        pending_payment_id=str(pending.id),
        installment_number=original.installment_number,
        remaining_amount=account.remaining_amount,
        installment_amount=account.installment_amount,
        next_due_date=account.next_due_date,
        status=account.status.value,
    )
