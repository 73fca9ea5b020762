"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field


# ---- Request schemas ----

class AccountCreateRequest(BaseModel):
    total_amount: Decimal = Field(..., description="Sale total before down payment")
    down_payment: Decimal = Decimal("0")
    number_of_installments: int
    payment_frequency: str = Field(..., description="WEEKLY | BIWEEKLY | MONTHLY | QUARTERLY | ANNUALLY")
    start_date: date = Field(..., description="Due date of installment 1")
    interest_rate: Decimal | None = Field(None, description="Nominal annual rate in percent")
    installment_amount: Decimal | None = Field(None, description="Override for the computed installment")
    notes: str | None = None


class PaymentRequest(BaseModel):
    amount_paid: Decimal
    payment_date: date | None = None
    payment_method: str | None = None
    transaction_reference: str | None = None
    notes: str | None = None
    installment_number: int | None = None
    surplus_action: str | None = Field(None, description="RECALCULATE | REDUCE_INSTALLMENTS")


# ---- Response schemas ----

class ActionResponse(BaseModel):
    success: bool
    message: str
    kind: str | None = None
    code: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)


class ScheduleEntryResponse(BaseModel):
    installment_number: int
    due_date: date | None = None
    capital_at_period_start: Decimal
    interest_for_period: Decimal
    amortization: Decimal
    calculated_installment_amount: Decimal
    capital_at_period_end: Decimal


class PaymentResponse(BaseModel):
    id: UUID
    installment_number: int
    amount_paid: Decimal
    payment_date: date | None = None
    payment_method: str | None = None
    transaction_reference: str | None = None
    notes: str | None = None
    installment_version: str | None = None
    state: str


class AccountResponse(BaseModel):
    id: UUID
    total_amount: Decimal
    down_payment: Decimal
    financed_amount: Decimal
    number_of_installments: int
    payment_frequency: str
    interest_rate: Decimal | None = None
    start_date: date
    remaining_amount: Decimal
    installment_amount: Decimal
    next_due_date: date | None = None
    status: str
    notes: str | None = None

    periodic_rate: Decimal
    total_interest: Decimal
    total_to_pay: Decimal
    schedule: list[ScheduleEntryResponse]
    payments: list[PaymentResponse]


class AccountSummaryResponse(BaseModel):
    id: UUID
    total_amount: Decimal
    down_payment: Decimal
    number_of_installments: int
    payment_frequency: str
    remaining_amount: Decimal
    installment_amount: Decimal
    next_due_date: date | None = None
    status: str


class AccountListResponse(BaseModel):
    items: list[AccountSummaryResponse]
    total_count: int
    page: int
    page_size: int
