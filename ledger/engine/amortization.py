"""French (constant-installment) amortization schedule.

Pure functions: Decimal in, dataclass out. No I/O.
"""

from decimal import Decimal

from ledger.engine.money import ONE, ZERO, ceil_units, to_decimal
from ledger.engine.periods import periodic_rate
from ledger.models.account import PaymentFrequency
from ledger.models.results import ScheduleEntry, ScheduleSummary


def fixed_installment(principal: Decimal, rate: Decimal, installments: int) -> Decimal:
    """Annuity payment, rounded up to whole units.

    PMT = P * r(1+r)^n / ((1+r)^n - 1), or ceil(P / n) when the rate is zero.
    """
    if rate == 0:
        return ceil_units(principal / installments)
    factor = (ONE + rate) ** installments
    if factor - ONE == 0:
        return ceil_units(principal / installments)
    return ceil_units(principal * rate * factor / (factor - ONE))


def recalculated_installment(
    balance,
    annual_rate_pct,
    remaining_installments: int,
    frequency: PaymentFrequency | str,
) -> Decimal:
    """New installment amount spreading a balance over the installments still ahead."""
    balance = to_decimal(balance)
    if balance <= 0 or remaining_installments <= 0:
        return ZERO
    rate = periodic_rate(annual_rate_pct, frequency)
    return fixed_installment(balance, rate, remaining_installments)


def _interest_free_schedule(principal: Decimal, installments: int) -> list[ScheduleEntry]:
    installment = ceil_units(principal / installments)
    capital = principal
    schedule: list[ScheduleEntry] = []
    for number in range(1, installments + 1):
        # Final installment absorbs the rounding remainder
        amort = capital if number == installments else min(installment, capital)
        end = max(ZERO, capital - amort)
        schedule.append(ScheduleEntry(
            installment_number=number,
            capital_at_period_start=capital,
            interest_for_period=ZERO,
            amortization=amort,
            calculated_installment_amount=amort,
            capital_at_period_end=end,
        ))
        capital = end
    return schedule


def amortization_schedule(
    principal,
    annual_rate_pct,
    number_of_installments: int,
    frequency: PaymentFrequency | str,
) -> list[ScheduleEntry]:
    """Full schedule for installments 1..N.

    Args:
        principal: Financed amount (total minus down payment)
        annual_rate_pct: Nominal annual rate in percent (e.g. 50 for 50%); None means interest-free
        number_of_installments: N
        frequency: Payment frequency, drives the effective periodic rate

    Returns an empty list for non-positive principal or N, or a negative rate.
    """
    principal = to_decimal(principal)
    annual = to_decimal(annual_rate_pct)
    if principal <= 0 or number_of_installments <= 0 or annual < 0:
        return []

    rate = periodic_rate(annual, frequency)
    if rate == 0 or (ONE + rate) ** number_of_installments == ONE:
        return _interest_free_schedule(principal, number_of_installments)

    installment = fixed_installment(principal, rate, number_of_installments)
    capital = principal
    schedule: list[ScheduleEntry] = []

    for number in range(1, number_of_installments + 1):
        interest = ceil_units(capital * rate)
        amort = installment - interest
        amount = installment

        # Final installment retires whatever capital is left
        if number == number_of_installments:
            amort = capital
            amount = ceil_units(capital + interest)

        amort = max(ZERO, min(amort, capital))
        end = max(ZERO, capital - amort)

        schedule.append(ScheduleEntry(
            installment_number=number,
            capital_at_period_start=capital,
            interest_for_period=interest,
            amortization=amort,
            calculated_installment_amount=amount,
            capital_at_period_end=end,
        ))
        capital = end

    return schedule


def schedule_summary(
    principal,
    annual_rate_pct,
    number_of_installments: int,
    frequency: PaymentFrequency | str,
) -> ScheduleSummary:
    """Schedule plus its totals."""
    entries = amortization_schedule(principal, annual_rate_pct, number_of_installments, frequency)
    return ScheduleSummary(
        entries=entries,
        periodic_rate=periodic_rate(annual_rate_pct, frequency),
        total_interest=sum((e.interest_for_period for e in entries), ZERO),
        total_amortization=sum((e.amortization for e in entries), ZERO),
        total_to_pay=sum((e.calculated_installment_amount for e in entries), ZERO),
    )


def entry_for(schedule: list[ScheduleEntry], installment_number: int) -> ScheduleEntry | None:
    for entry in schedule:
        if entry.installment_number == installment_number:
            return entry
    return None
