"""Payment frequency conversions: periods per year, effective periodic rate, due dates.

Pure functions. No I/O.
"""

import logging
from collections.abc import Collection
from datetime import date, timedelta
from decimal import Decimal, localcontext

from dateutil.relativedelta import relativedelta

from ledger.engine.money import ONE, ZERO, to_decimal
from ledger.models.account import PaymentFrequency

logger = logging.getLogger(__name__)

DEFAULT_PERIODS_PER_YEAR = 12

PERIODS_PER_YEAR = {
    PaymentFrequency.WEEKLY: 52,
    PaymentFrequency.BIWEEKLY: 26,
    PaymentFrequency.MONTHLY: 12,
    PaymentFrequency.QUARTERLY: 4,
    PaymentFrequency.ANNUALLY: 1,
}


def _coerce_frequency(frequency) -> PaymentFrequency | None:
    try:
        return PaymentFrequency(frequency)
    except ValueError:
        return None


def periods_per_year(frequency: PaymentFrequency | str) -> int:
    freq = _coerce_frequency(frequency)
    if freq is None:
        logger.warning(
            "Unknown payment frequency %r, defaulting to %d periods per year",
            frequency, DEFAULT_PERIODS_PER_YEAR,
        )
        return DEFAULT_PERIODS_PER_YEAR
    return PERIODS_PER_YEAR[freq]


def periodic_rate(annual_rate_pct, frequency: PaymentFrequency | str) -> Decimal:
    """Effective periodic rate from a nominal annual percentage.

    rate = (1 + annual/100) ** (1 / periods_per_year) - 1, so 12% monthly is
    ~0.009489 rather than 0.01.
    """
    annual = to_decimal(annual_rate_pct)
    if annual <= 0:
        return ZERO
    periods = Decimal(periods_per_year(frequency))
    with localcontext() as ctx:
        ctx.prec = 28
        return (ONE + annual / 100) ** (ONE / periods) - ONE


def due_date(
    anchor: date,
    frequency: PaymentFrequency | str,
    installment_index: int,
    number_of_installments: int,
) -> date | None:
    """Calendar due date of the installment at a 0-based index, or None once the schedule is exhausted."""
    if installment_index >= number_of_installments:
        return None

    freq = _coerce_frequency(frequency) or PaymentFrequency.MONTHLY
    if freq == PaymentFrequency.WEEKLY:
        return anchor + timedelta(days=7 * installment_index)
    if freq == PaymentFrequency.BIWEEKLY:
        return anchor + timedelta(days=14 * installment_index)
    if freq == PaymentFrequency.MONTHLY:
        return anchor + relativedelta(months=installment_index)
    if freq == PaymentFrequency.QUARTERLY:
        return anchor + relativedelta(months=3 * installment_index)
    return anchor + relativedelta(years=installment_index)


def next_due_date(
    anchor: date,
    frequency: PaymentFrequency | str,
    consumed_count: int,
    number_of_installments: int,
    pending_numbers: Collection[int] = (),
) -> date | None:
    """Due date of the earliest installment still open.

    A pending placeholder reopens its slot, so the lowest pending number wins
    over the first never-touched slot.
    """
    if pending_numbers:
        return due_date(anchor, frequency, min(pending_numbers) - 1, number_of_installments)
    return due_date(anchor, frequency, consumed_count, number_of_installments)
