"""Which schedule slot a new payment fills."""

from collections.abc import Collection

from ledger.exceptions import (
    InstallmentAlreadyPaidError,
    InvalidInstallmentError,
    ScheduleExhaustedError,
)


def resolve_installment_number(
    requested: int | None,
    number_of_installments: int,
    consumed_count: int,
    paid_numbers: Collection[int],
) -> int:
    """Validate an explicit installment number or derive the next one.

    Args:
        requested: Caller-supplied 1-based installment number, if any
        number_of_installments: Size of the schedule (N)
        consumed_count: Rows with a null version (paid or pending placeholders)
        paid_numbers: Installment numbers that already carry an effective payment

    Pending placeholders left by a reversal never block their slot.
    """
    if requested is not None:
        if not 1 <= requested <= number_of_installments:
            raise InvalidInstallmentError(
                f"El número de cuota debe estar entre 1 y {number_of_installments}."
            )
        if requested in paid_numbers:
            raise InstallmentAlreadyPaidError(f"La cuota {requested} ya fue pagada.")
        return requested

    number = consumed_count + 1
    if number > number_of_installments:
        raise ScheduleExhaustedError()
    if number in paid_numbers:
        raise InstallmentAlreadyPaidError(f"La cuota {number} ya fue pagada.")
    return number
