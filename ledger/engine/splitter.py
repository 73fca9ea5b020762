"""Split an incoming payment into interest and amortization and apply the surplus policy.

Pure functions. No I/O.
"""

from decimal import Decimal

from ledger.engine.amortization import amortization_schedule, entry_for, recalculated_installment
from ledger.engine.money import ZERO, ceil_units, to_decimal
from ledger.engine.periods import periodic_rate
from ledger.models.account import AccountStatus, AccountTerms, SurplusAction
from ledger.models.results import PaymentSplit, ScheduleEntry

SURPLUS_TOLERANCE = Decimal("1")


def original_plan(terms: AccountTerms) -> list[ScheduleEntry]:
    """The account's schedule as agreed at creation. Empty for interest-free accounts."""
    principal = terms.financial_principal
    if not terms.bears_interest or principal <= 0:
        return []
    return amortization_schedule(
        principal, terms.annual_rate, terms.number_of_installments, terms.payment_frequency
    )


def split_payment(
    terms: AccountTerms,
    installment_number: int,
    amount_paid,
    surplus_action: SurplusAction | str | None = None,
) -> PaymentSplit:
    """Compute the account update produced by paying one installment.

    Capital at period start comes from the original plan; accounts without a
    plan entry fall back to their current remaining amount.
    """
    amount = to_decimal(amount_paid)
    plan_entry = entry_for(original_plan(terms), installment_number)

    capital_at_start = (
        plan_entry.capital_at_period_start if plan_entry else to_decimal(terms.remaining_amount)
    )
    rate = periodic_rate(terms.annual_rate, terms.payment_frequency)

    interest = ceil_units(capital_at_start * rate) if rate > 0 else ZERO
    amortization = max(ZERO, amount - interest)
    new_balance = max(ZERO, capital_at_start - amortization)

    reference = (
        plan_entry.calculated_installment_amount if plan_entry
        else to_decimal(terms.installment_amount)
    )
    has_surplus = amount > reference + SURPLUS_TOLERANCE

    installment_amount = to_decimal(terms.installment_amount)
    if has_surplus and SurplusAction.coerce(surplus_action) == SurplusAction.RECALCULATE:
        installment_amount = recalculated_installment(
            new_balance,
            terms.annual_rate,
            terms.number_of_installments - installment_number,
            terms.payment_frequency,
        )
    # REDUCE_INSTALLMENTS keeps the installment amount; only the balance shrinks.

    return PaymentSplit(
        installment_number=installment_number,
        amount_paid=amount,
        capital_at_start=capital_at_start,
        periodic_rate=rate,
        interest_component=interest,
        amortization_component=amortization,
        reference_installment=reference,
        has_surplus=has_surplus,
        new_balance=new_balance,
        installment_amount=installment_amount,
        status=AccountStatus.PAID_OFF if new_balance <= 0 else AccountStatus.ACTIVE,
    )
