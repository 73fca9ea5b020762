"""SQLAlchemy ORM models for the current-account ledger."""

import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    Date,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from ledger.models.account import AccountStatus, AccountTerms, PaymentFrequency
from ledger.models.payment import PaymentState


class Base(DeclarativeBase):
    pass


class CurrentAccountRecord(Base):
    __tablename__ = "current_accounts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    organization_id: Mapped[str] = mapped_column(String(64), index=True)

    # Terms (fixed at creation)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    down_payment: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0)
    number_of_installments: Mapped[int] = mapped_column(Integer)
    interest_rate: Mapped[Decimal | None] = mapped_column(Numeric(9, 4), nullable=True)  # Annual %
    payment_frequency: Mapped[PaymentFrequency] = mapped_column(
        SAEnum(PaymentFrequency, native_enum=False, length=16)
    )
    start_date: Mapped[date] = mapped_column(Date)

    # Mutable state, rewritten by every payment and reversal
    remaining_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    installment_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    next_due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[AccountStatus] = mapped_column(
        SAEnum(AccountStatus, native_enum=False, length=16), default=AccountStatus.ACTIVE
    )

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    payments: Mapped[list["PaymentRecord"]] = relationship(back_populates="current_account")

    def terms(self) -> AccountTerms:
        return AccountTerms(
            total_amount=self.total_amount,
            down_payment=self.down_payment,
            number_of_installments=self.number_of_installments,
            payment_frequency=self.payment_frequency,
            remaining_amount=self.remaining_amount,
            installment_amount=self.installment_amount,
            interest_rate=self.interest_rate,
            start_date=self.start_date,
        )


class PaymentRecord(Base):
    """Append-only ledger row. Annulment flags rows in place, never deletes them."""
    __tablename__ = "payments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    current_account_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("current_accounts.id"), index=True, nullable=True
    )
    organization_id: Mapped[str] = mapped_column(String(64), index=True)

    amount_paid: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    payment_date: Mapped[date | None] = mapped_column(Date, nullable=True)  # Null on pending placeholders
    payment_method: Mapped[str | None] = mapped_column(String(50), nullable=True)
    transaction_reference: Mapped[str | None] = mapped_column(String(100), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    installment_number: Mapped[int] = mapped_column(Integer)
    installment_version: Mapped[str | None] = mapped_column(String(1), nullable=True)  # None | "D" | "H"

    current_account: Mapped["CurrentAccountRecord"] = relationship(back_populates="payments")

    @property
    def state(self) -> PaymentState:
        return PaymentState.from_columns(self.installment_version, self.payment_date)
