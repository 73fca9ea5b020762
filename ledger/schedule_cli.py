"""CLI for previewing amortization plans and payment splits.

Usage:
    python -m ledger.schedule_cli 12000 --rate 12 --installments 12 --frequency MONTHLY
    python -m ledger.schedule_cli 1200 --installments 12 --start 2025-01-31
    python -m ledger.schedule_cli 12000 --rate 50 --installments 12 --pay 1 1500
"""

import argparse
from datetime import date
from decimal import Decimal

from ledger.engine.amortization import schedule_summary
from ledger.engine.periods import due_date
from ledger.engine.splitter import split_payment
from ledger.models.account import AccountTerms, PaymentFrequency, SurplusAction


def print_schedule(summary, start: date, frequency: PaymentFrequency, installments: int) -> None:
    print(f"\n{'=' * 84}")
    print(f"  Amortization Plan  ({frequency.value}, periodic rate {summary.periodic_rate:.6f})")
    print(f"{'=' * 84}")
    print(f"  {'#':>3}  {'Due':>10}  {'Capital':>12}  {'Interest':>10}  {'Amortization':>12}  {'Installment':>12}  {'Balance':>12}")
    for e in summary.entries:
        due = due_date(start, frequency, e.installment_number - 1, installments)
        print(
            f"  {e.installment_number:>3}  {due.isoformat():>10}  {e.capital_at_period_start:>12,.2f}"
            f"  {e.interest_for_period:>10,.2f}  {e.amortization:>12,.2f}"
            f"  {e.calculated_installment_amount:>12,.2f}  {e.capital_at_period_end:>12,.2f}"
        )
    print()
    print(f"  Total interest:      {summary.total_interest:,.2f}")
    print(f"  Total amortization:  {summary.total_amortization:,.2f}")
    print(f"  Total to pay:        {summary.total_to_pay:,.2f}")
    print()


def print_split(split) -> None:
    print(f"  Payment of {split.amount_paid:,.2f} on installment {split.installment_number}")
    print(f"    Interest:          {split.interest_component:,.2f}")
    print(f"    Amortization:      {split.amortization_component:,.2f}")
    print(f"    Surplus:           {split.surplus:,.2f}")
    print(f"    New balance:       {split.new_balance:,.2f}")
    print(f"    Next installment:  {split.installment_amount:,.2f}")
    print(f"    Status:            {split.status.value}")
    print()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Installment plan preview")
    parser.add_argument("principal", type=Decimal, help="Financed amount (total minus down payment)")
    parser.add_argument("--rate", type=Decimal, default=Decimal("0"), help="Nominal annual rate in percent (default: 0)")
    parser.add_argument("--installments", type=int, required=True, help="Number of installments")
    parser.add_argument(
        "--frequency", type=PaymentFrequency, choices=list(PaymentFrequency),
        default=PaymentFrequency.MONTHLY, help="Payment frequency (default: MONTHLY)",
    )
    parser.add_argument("--start", type=date.fromisoformat, default=None, help="Due date of installment 1 (default: today)")
    parser.add_argument(
        "--pay", nargs=2, metavar=("INSTALLMENT", "AMOUNT"),
        help="Preview how a payment on a fresh account would be split",
    )
    parser.add_argument(
        "--surplus", type=SurplusAction, choices=list(SurplusAction),
        default=SurplusAction.RECALCULATE, help="Surplus policy for --pay",
    )

    args = parser.parse_args(argv)
    if args.principal <= 0 or args.installments <= 0:
        parser.error("principal and installments must be positive")

    summary = schedule_summary(args.principal, args.rate, args.installments, args.frequency)
    print_schedule(summary, args.start or date.today(), args.frequency, args.installments)

    if args.pay:
        installment = summary.entries[0].calculated_installment_amount
        terms = AccountTerms(
            total_amount=args.principal,
            down_payment=Decimal("0"),
            number_of_installments=args.installments,
            payment_frequency=args.frequency,
            remaining_amount=args.principal,
            installment_amount=installment,
            interest_rate=args.rate,
        )
        split = split_payment(terms, int(args.pay[0]), Decimal(args.pay[1]), args.surplus)
        print_split(split)


if __name__ == "__main__":
    main()
