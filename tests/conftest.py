"""Shared fixtures.

Ledger tests run against an in-memory SQLite database through aiosqlite.
Canonical account: 12,000 financed interest-free over 12 monthly
installments of 1,000, first due 2025-01-31.
"""

import uuid
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.pool import StaticPool

from ledger.data.accounts import create_account
from ledger.data.session import build_engine, build_session_factory, create_schema
from ledger.models.account import AccountTerms, PaymentFrequency

@pytest.fixture
async def engine():
    engine = build_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def org() -> str:
    return "org-a"


@pytest.fixture
def other_org() -> str:
    return "org-b"


@pytest.fixture
def open_account(session_factory, org):
    """Create an account for the default organization and return its id."""

    async def _open(**overrides) -> uuid.UUID:
        fields = {
            "total_amount": Decimal("12000"),
            "down_payment": Decimal("0"),
            "number_of_installments": 12,
            "payment_frequency": "MONTHLY",
            "start_date": date(2025, 1, 31),
        }
        fields.update(overrides)
        result = await create_account(session_factory, org, **fields)
        assert result.success, result.message
        return uuid.UUID(result.data["account_id"])

    return _open


@pytest.fixture
def interest_free_terms() -> AccountTerms:
    """12,000 over 12 monthly installments, nothing paid yet."""
    return AccountTerms(
        total_amount=Decimal("12000"),
        down_payment=Decimal("0"),
        number_of_installments=12,
        payment_frequency=PaymentFrequency.MONTHLY,
        remaining_amount=Decimal("12000"),
        installment_amount=Decimal("1000"),
    )


@pytest.fixture
def interest_bearing_terms() -> AccountTerms:
    """15,000 sale, 3,000 down, 12% nominal annual over 12 monthly installments."""
    return AccountTerms(
        total_amount=Decimal("15000"),
        down_payment=Decimal("3000"),
        number_of_installments=12,
        payment_frequency=PaymentFrequency.MONTHLY,
        remaining_amount=Decimal("12000"),
        installment_amount=Decimal("1063"),
        interest_rate=Decimal("12"),
    )
