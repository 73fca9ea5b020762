from datetime import date
from decimal import Decimal

from ledger.engine.periods import due_date, next_due_date, periodic_rate, periods_per_year
from ledger.models.account import PaymentFrequency


class TestPeriodsPerYear:
    def test_known_frequencies(self):
        assert periods_per_year(PaymentFrequency.WEEKLY) == 52
        assert periods_per_year(PaymentFrequency.BIWEEKLY) == 26
        assert periods_per_year(PaymentFrequency.MONTHLY) == 12
        assert periods_per_year(PaymentFrequency.QUARTERLY) == 4
        assert periods_per_year(PaymentFrequency.ANNUALLY) == 1

    def test_accepts_plain_strings(self):
        assert periods_per_year("QUARTERLY") == 4

    def test_unknown_defaults_to_monthly(self, caplog):
        assert periods_per_year("FORTNIGHTLY") == 12
        assert "Unknown payment frequency" in caplog.text


class TestPeriodicRate:
    def test_effective_not_nominal(self):
        """12% annual is ~0.9489% per month, not 1%."""
        rate = periodic_rate(Decimal("12"), PaymentFrequency.MONTHLY)
        assert rate.quantize(Decimal("0.000001")) == Decimal("0.009489")

    def test_compounds_back_to_annual(self):
        rate = periodic_rate(Decimal("12"), PaymentFrequency.MONTHLY)
        assert abs((1 + rate) ** 12 - Decimal("1.12")) < Decimal("0.0000001")

    def test_annual_frequency_is_the_rate(self):
        assert periodic_rate(Decimal("12"), PaymentFrequency.ANNUALLY) == Decimal("0.12")

    def test_zero_and_missing_rate(self):
        assert periodic_rate(Decimal("0"), PaymentFrequency.MONTHLY) == 0
        assert periodic_rate(None, PaymentFrequency.MONTHLY) == 0

    def test_negative_rate_is_zero(self):
        assert periodic_rate(Decimal("-5"), PaymentFrequency.MONTHLY) == 0


class TestDueDate:
    def test_first_installment_on_anchor(self):
        assert due_date(date(2025, 1, 15), PaymentFrequency.MONTHLY, 0, 12) == date(2025, 1, 15)

    def test_month_end_clamps(self):
        anchor = date(2025, 1, 31)
        assert due_date(anchor, PaymentFrequency.MONTHLY, 1, 12) == date(2025, 2, 28)
        assert due_date(anchor, PaymentFrequency.MONTHLY, 2, 12) == date(2025, 3, 31)

    def test_leap_year(self):
        assert due_date(date(2024, 1, 31), PaymentFrequency.MONTHLY, 1, 12) == date(2024, 2, 29)

    def test_weekly_and_biweekly(self):
        anchor = date(2025, 3, 3)
        assert due_date(anchor, PaymentFrequency.WEEKLY, 2, 10) == date(2025, 3, 17)
        assert due_date(anchor, PaymentFrequency.BIWEEKLY, 1, 10) == date(2025, 3, 17)

    def test_quarterly_and_annual(self):
        anchor = date(2025, 1, 15)
        assert due_date(anchor, PaymentFrequency.QUARTERLY, 1, 4) == date(2025, 4, 15)
        assert due_date(anchor, PaymentFrequency.ANNUALLY, 1, 3) == date(2026, 1, 15)

    def test_exhausted_schedule(self):
        assert due_date(date(2025, 1, 15), PaymentFrequency.MONTHLY, 12, 12) is None


class TestNextDueDate:
    def test_first_untouched_slot(self):
        assert next_due_date(date(2025, 1, 31), PaymentFrequency.MONTHLY, 2, 12) == date(2025, 3, 31)

    def test_pending_slot_comes_first(self):
        anchor = date(2025, 1, 31)
        assert next_due_date(anchor, PaymentFrequency.MONTHLY, 3, 12, {3, 2}) == date(2025, 2, 28)

    def test_reopened_last_slot(self):
        assert next_due_date(date(2025, 1, 31), PaymentFrequency.MONTHLY, 1, 1, {1}) == date(2025, 1, 31)

    def test_nothing_open(self):
        assert next_due_date(date(2025, 1, 31), PaymentFrequency.MONTHLY, 12, 12) is None
