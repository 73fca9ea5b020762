"""Validated inputs of the ledger operations.

Validation happens before any I/O; the first failing field is reported.
"""

import uuid
from datetime import date
from decimal import Decimal

import pydantic
from pydantic import BaseModel, Field, model_validator

from ledger.exceptions import InvalidInputError
from ledger.models.account import AccountStatus, PaymentFrequency, SurplusAction


class PaymentInput(BaseModel):
    account_id: uuid.UUID
    amount_paid: Decimal = Field(..., gt=0)
    payment_date: date | None = None
    payment_method: str | None = Field(None, min_length=1, max_length=50)
    transaction_reference: str | None = Field(None, max_length=100)
    notes: str | None = None
    installment_number: int | None = Field(None, ge=1)
    surplus_action: str | None = None

    @property
    def surplus_policy(self) -> SurplusAction:
        return SurplusAction.coerce(self.surplus_action)


class UndoInput(BaseModel):
    payment_id: uuid.UUID


class AccountInput(BaseModel):
    total_amount: Decimal = Field(..., gt=0)
    down_payment: Decimal = Field(Decimal("0"), ge=0)
    number_of_installments: int = Field(..., ge=1)
    payment_frequency: PaymentFrequency
    start_date: date
    interest_rate: Decimal | None = Field(None, ge=0)
    installment_amount: Decimal | None = Field(None, gt=0)
    notes: str | None = None

    @model_validator(mode="after")
    def _down_payment_within_total(self) -> "AccountInput":
        if self.down_payment > self.total_amount:
            raise ValueError("El pago inicial no puede ser mayor que el monto total.")
        return self


def parse_input(model: type[BaseModel], **fields) -> BaseModel:
    """Build a validated input or raise InvalidInputError with the first problem found."""
    try:
        return model(**fields)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        message = first["msg"]
        raise InvalidInputError(f"{location}: {message}" if location else message) from e


class AccountListInput(BaseModel):
    status: AccountStatus | None = None
    page: int = Field(1, ge=1)
    page_size: int = Field(10, ge=1, le=100)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size
