"""Tenant-scoped queries over accounts and their payment ledger.

Every query filters on the organization the repository was opened for.
"""

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from ledger.models.account import AccountStatus
from ledger.models.db import CurrentAccountRecord, PaymentRecord


class LedgerRepository:
    def __init__(self, session: AsyncSession, organization_id: str):
        self.session = session
        self.organization_id = organization_id

    async def get_account(
        self, account_id: uuid.UUID, for_update: bool = False
    ) -> CurrentAccountRecord | None:
        stmt = select(CurrentAccountRecord).where(
            CurrentAccountRecord.id == account_id,
            CurrentAccountRecord.organization_id == self.organization_id,
        )
        if for_update:
            stmt = stmt.with_for_update()
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def list_accounts(
        self, status: AccountStatus | None = None, limit: int = 10, offset: int = 0
    ) -> tuple[list[CurrentAccountRecord], int]:
        """One page of accounts, newest first, plus the total matching count."""
        filters = [CurrentAccountRecord.organization_id == self.organization_id]
        if status is not None:
            filters.append(CurrentAccountRecord.status == status)
        total = (
            await self.session.execute(
                select(func.count()).select_from(CurrentAccountRecord).where(*filters)
            )
        ).scalar_one()
        stmt = (
            select(CurrentAccountRecord)
            .where(*filters)
            .order_by(CurrentAccountRecord.created_at.desc(), CurrentAccountRecord.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list((await self.session.execute(stmt)).scalars()), total

    async def get_payment(self, payment_id: uuid.UUID) -> PaymentRecord | None:
        stmt = (
            select(PaymentRecord)
            .options(joinedload(PaymentRecord.current_account))
            .where(
                PaymentRecord.id == payment_id,
                PaymentRecord.organization_id == self.organization_id,
            )
        )
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def list_payments(self, account_id: uuid.UUID) -> list[PaymentRecord]:
        stmt = (
            select(PaymentRecord)
            .where(
                PaymentRecord.current_account_id == account_id,
                PaymentRecord.organization_id == self.organization_id,
            )
            .order_by(PaymentRecord.installment_number, PaymentRecord.created_at)
        )
        return list((await self.session.execute(stmt)).scalars())

    async def count_consumed(self, account_id: uuid.UUID) -> int:
        """Rows with a null version: effective payments plus pending placeholders."""
        stmt = select(func.count()).select_from(PaymentRecord).where(
            PaymentRecord.current_account_id == account_id,
            PaymentRecord.organization_id == self.organization_id,
            PaymentRecord.installment_version.is_(None),
        )
        return (await self.session.execute(stmt)).scalar_one()

    async def paid_installment_numbers(self, account_id: uuid.UUID) -> set[int]:
        stmt = select(PaymentRecord.installment_number).where(
            PaymentRecord.current_account_id == account_id,
            PaymentRecord.organization_id == self.organization_id,
            PaymentRecord.installment_version.is_(None),
            PaymentRecord.payment_date.is_not(None),
        )
        return set((await self.session.execute(stmt)).scalars())

    async def pending_installment_numbers(self, account_id: uuid.UUID) -> set[int]:
        stmt = select(PaymentRecord.installment_number).where(
            PaymentRecord.current_account_id == account_id,
            PaymentRecord.organization_id == self.organization_id,
            PaymentRecord.installment_version.is_(None),
            PaymentRecord.payment_date.is_(None),
        )
        return set((await self.session.execute(stmt)).scalars())

    async def find_pending_placeholder(
        self, account_id: uuid.UUID, installment_number: int
    ) -> PaymentRecord | None:
        stmt = (
            select(PaymentRecord)
            .where(
                PaymentRecord.current_account_id == account_id,
                PaymentRecord.organization_id == self.organization_id,
                PaymentRecord.installment_number == installment_number,
                PaymentRecord.installment_version.is_(None),
                PaymentRecord.payment_date.is_(None),
            )
            .order_by(PaymentRecord.created_at)
            .limit(1)
        )
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def add(self, record) -> None:
        self.session.add(record)
        await self.session.flush()
