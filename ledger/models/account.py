from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class PaymentFrequency(str, Enum):
    WEEKLY = "WEEKLY"
    BIWEEKLY = "BIWEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    ANNUALLY = "ANNUALLY"


class AccountStatus(str, Enum):
    ACTIVE = "ACTIVE"
    PAID_OFF = "PAID_OFF"


class SurplusAction(str, Enum):
    RECALCULATE = "RECALCULATE"
    REDUCE_INSTALLMENTS = "REDUCE_INSTALLMENTS"

    @classmethod
    def coerce(cls, value: "str | SurplusAction | None") -> "SurplusAction":
        """Unrecognized or missing policies fall back to RECALCULATE."""
        try:
            return cls(value)
        except ValueError:
            return cls.RECALCULATE


@dataclass(frozen=True)
class AccountTerms:
    """Snapshot of a financed sale, as seen by the payment engine."""
    total_amount: Decimal
    down_payment: Decimal
    number_of_installments: int
    payment_frequency: PaymentFrequency
    remaining_amount: Decimal
    installment_amount: Decimal
    interest_rate: Decimal | None = None  # Annual nominal %, e.g. Decimal("50")
    start_date: date | None = None

    @property
    def financial_principal(self) -> Decimal:
        return self.total_amount - self.down_payment

    @property
    def annual_rate(self) -> Decimal:
        return self.interest_rate if self.interest_rate is not None else Decimal("0")

    @property
    def bears_interest(self) -> bool:
        return self.annual_rate > 0
