from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from ledger.exceptions import ErrorKind, LedgerError
from ledger.models.account import AccountStatus


@dataclass(frozen=True)
class ScheduleEntry:
    installment_number: int
    capital_at_period_start: Decimal
    interest_for_period: Decimal
    amortization: Decimal
    calculated_installment_amount: Decimal
    capital_at_period_end: Decimal


@dataclass(frozen=True)
class ScheduleSummary:
    entries: list[ScheduleEntry]
    periodic_rate: Decimal
    total_interest: Decimal
    total_amortization: Decimal
    total_to_pay: Decimal


@dataclass(frozen=True)
class PaymentSplit:
    installment_number: int
    amount_paid: Decimal
    capital_at_start: Decimal
    periodic_rate: Decimal
    interest_component: Decimal
    amortization_component: Decimal
    reference_installment: Decimal
    has_surplus: bool
    new_balance: Decimal
    installment_amount: Decimal
    status: AccountStatus

    @property
    def surplus(self) -> Decimal:
        return max(Decimal("0"), self.amount_paid - self.reference_installment)


@dataclass
class ActionResult:
    """Outcome of a ledger operation. Failures never escape as exceptions."""
    success: bool
    message: str
    kind: ErrorKind | None = None
    code: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, message: str, **data: Any) -> "ActionResult":
        return cls(success=True, message=message, data=data)

    @classmethod
    def failure(cls, error: LedgerError) -> "ActionResult":
        return cls(success=False, message=error.message, kind=error.kind, code=error.code)
