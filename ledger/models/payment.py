from datetime import date
from enum import Enum


class InstallmentVersion(str, Enum):
    """Persisted double-entry codes. A null version is a normal row."""
    DEBE = "D"   # Original payment, annulled in place
    HABER = "H"  # Compensating mirror of an annulled payment


class PaymentState(Enum):
    SCHEDULED = "scheduled"  # Pending placeholder spawned by a reversal
    PAID = "paid"
    REVERSED = "reversed"
    COMPENSATING_CREDIT = "compensating_credit"

    @classmethod
    def from_columns(cls, version: str | None, payment_date: date | None) -> "PaymentState":
        if version == InstallmentVersion.DEBE.value:
            return cls.REVERSED
        if version == InstallmentVersion.HABER.value:
            return cls.COMPENSATING_CREDIT
        if version is not None:
            raise ValueError(f"Unknown installment version: {version!r}")
        return cls.PAID if payment_date is not None else cls.SCHEDULED

    @property
    def counts_as_consumed(self) -> bool:
        """Rows that occupy a schedule slot (null version), paid or pending."""
        return self in (PaymentState.PAID, PaymentState.SCHEDULED)

    @property
    def is_annulment_entry(self) -> bool:
        return self in (PaymentState.REVERSED, PaymentState.COMPENSATING_CREDIT)
