import pytest

from ledger.engine.numbering import resolve_installment_number
from ledger.exceptions import (
    InstallmentAlreadyPaidError,
    InvalidInstallmentError,
    ScheduleExhaustedError,
)


class TestExplicitNumber:
    def test_free_slot(self):
        assert resolve_installment_number(4, 12, 1, {1}) == 4

    def test_out_of_range(self):
        with pytest.raises(InvalidInstallmentError):
            resolve_installment_number(0, 12, 0, set())
        with pytest.raises(InvalidInstallmentError):
            resolve_installment_number(13, 12, 0, set())

    def test_already_paid(self):
        with pytest.raises(InstallmentAlreadyPaidError):
            resolve_installment_number(2, 12, 2, {1, 2})

    def test_pending_placeholder_does_not_block(self):
        """Slot 3 was reversed: it counts as consumed but holds no effective payment."""
        assert resolve_installment_number(3, 12, 3, {1, 2}) == 3


class TestAutoNumber:
    def test_first_payment(self):
        assert resolve_installment_number(None, 12, 0, set()) == 1

    def test_next_after_consumed(self):
        assert resolve_installment_number(None, 12, 5, {1, 2, 3, 4, 5}) == 6

    def test_exhausted(self):
        with pytest.raises(ScheduleExhaustedError):
            resolve_installment_number(None, 3, 3, {1, 2, 3})

    def test_collides_with_explicit_payment(self):
        """Installment 2 was paid out of order, so the derived slot is taken."""
        with pytest.raises(InstallmentAlreadyPaidError):
            resolve_installment_number(None, 12, 1, {2})
