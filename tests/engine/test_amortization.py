from decimal import Decimal

from ledger.engine.amortization import (
    amortization_schedule,
    entry_for,
    fixed_installment,
    recalculated_installment,
    schedule_summary,
)
from ledger.models.account import PaymentFrequency


class TestFixedInstallment:
    def test_one_percent_rounds_up(self):
        """1,200 at 1% per period over 12: 106.62 rounds up to 107."""
        assert fixed_installment(Decimal("1200"), Decimal("0.01"), 12) == Decimal("107")

    def test_zero_rate(self):
        assert fixed_installment(Decimal("1200"), Decimal("0"), 12) == Decimal("100")

    def test_zero_rate_rounds_up(self):
        assert fixed_installment(Decimal("1000"), Decimal("0"), 3) == Decimal("334")


class TestRecalculatedInstallment:
    def test_interest_free(self):
        assert recalculated_installment(Decimal("10500"), None, 11, PaymentFrequency.MONTHLY) == Decimal("955")

    def test_nothing_left(self):
        assert recalculated_installment(Decimal("0"), Decimal("12"), 6, PaymentFrequency.MONTHLY) == 0
        assert recalculated_installment(Decimal("500"), Decimal("12"), 0, PaymentFrequency.MONTHLY) == 0


class TestAmortizationSchedule:
    def test_interest_free_even_split(self):
        schedule = amortization_schedule(Decimal("1200"), Decimal("0"), 12, PaymentFrequency.MONTHLY)
        assert len(schedule) == 12
        for entry in schedule:
            assert entry.interest_for_period == 0
            assert entry.amortization == Decimal("100")
            assert entry.calculated_installment_amount == Decimal("100")
        assert schedule[-1].capital_at_period_end == 0

    def test_interest_free_last_installment_absorbs_remainder(self):
        schedule = amortization_schedule(Decimal("1000"), None, 3, PaymentFrequency.MONTHLY)
        assert [e.calculated_installment_amount for e in schedule] == [
            Decimal("334"), Decimal("334"), Decimal("332"),
        ]

    def test_first_period(self):
        """12,000 at 12% nominal: interest ceil(113.87) = 114, installment 1,063."""
        schedule = amortization_schedule(Decimal("12000"), Decimal("12"), 12, PaymentFrequency.MONTHLY)
        first = schedule[0]
        assert first.capital_at_period_start == Decimal("12000")
        assert first.interest_for_period == Decimal("114")
        assert first.calculated_installment_amount == Decimal("1063")
        assert first.amortization == Decimal("949")
        assert first.capital_at_period_end == Decimal("11051")

    def test_amortization_sums_to_principal(self):
        schedule = amortization_schedule(Decimal("12000"), Decimal("50"), 12, PaymentFrequency.MONTHLY)
        assert sum(e.amortization for e in schedule) == Decimal("12000")
        assert schedule[-1].capital_at_period_end == 0

    def test_capital_chains_between_periods(self):
        schedule = amortization_schedule(Decimal("8000"), Decimal("24"), 26, PaymentFrequency.BIWEEKLY)
        for prev, cur in zip(schedule, schedule[1:]):
            assert cur.capital_at_period_start == prev.capital_at_period_end
            assert cur.capital_at_period_end <= prev.capital_at_period_end

    def test_interest_is_whole_units(self):
        schedule = amortization_schedule(Decimal("12000"), Decimal("12"), 12, PaymentFrequency.MONTHLY)
        for entry in schedule:
            assert entry.interest_for_period == entry.interest_for_period.to_integral_value()
            assert entry.amortization >= 0

    def test_degenerate_inputs(self):
        assert amortization_schedule(Decimal("0"), Decimal("12"), 12, PaymentFrequency.MONTHLY) == []
        assert amortization_schedule(Decimal("1000"), Decimal("12"), 0, PaymentFrequency.MONTHLY) == []
        assert amortization_schedule(Decimal("1000"), Decimal("-1"), 12, PaymentFrequency.MONTHLY) == []


class TestScheduleSummary:
    def test_totals(self):
        summary = schedule_summary(Decimal("12000"), Decimal("12"), 12, PaymentFrequency.MONTHLY)
        assert summary.total_amortization == Decimal("12000")
        assert summary.total_interest > 0
        assert summary.total_to_pay == summary.total_interest + summary.total_amortization

    def test_entry_lookup(self):
        summary = schedule_summary(Decimal("1200"), Decimal("0"), 12, PaymentFrequency.MONTHLY)
        assert entry_for(summary.entries, 5).installment_number == 5
        assert entry_for(summary.entries, 13) is None
