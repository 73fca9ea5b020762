"""Current account routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ledger.api.deps import get_organization_id, get_session_factory
from ledger.api.responses import action_response
from ledger.api.schemas import (
    AccountCreateRequest,
    AccountListResponse,
    AccountResponse,
    AccountSummaryResponse,
    PaymentRequest,
    PaymentResponse,
    ScheduleEntryResponse,
)
from ledger.data.accounts import create_account, get_account_details, list_accounts
from ledger.data.payments import record_payment
from ledger.engine.periods import due_date

router = APIRouter(prefix="/api/v1/accounts", tags=["accounts"])


def _details_to_response(account, payments, summary) -> AccountResponse:
    """Convert the account, its ledger rows and its plan to the API response."""
    schedule = [
        ScheduleEntryResponse(
            installment_number=e.installment_number,
            due_date=due_date(
                account.start_date, account.payment_frequency,
                e.installment_number - 1, account.number_of_installments,
            ),
            capital_at_period_start=e.capital_at_period_start,
            interest_for_period=e.interest_for_period,
            amortization=e.amortization,
            calculated_installment_amount=e.calculated_installment_amount,
            capital_at_period_end=e.capital_at_period_end,
        )
        for e in summary.entries
    ]
    rows = [
        PaymentResponse(
            id=p.id,
            installment_number=p.installment_number,
            amount_paid=p.amount_paid,
            payment_date=p.payment_date,
            payment_method=p.payment_method,
            transaction_reference=p.transaction_reference,
            notes=p.notes,
            installment_version=p.installment_version,
            state=p.state.value,
        )
        for p in payments
    ]
    return AccountResponse(
        id=account.id,
        total_amount=account.total_amount,
        down_payment=account.down_payment,
        financed_amount=account.total_amount - account.down_payment,
        number_of_installments=account.number_of_installments,
        payment_frequency=account.payment_frequency.value,
        interest_rate=account.interest_rate,
        start_date=account.start_date,
        remaining_amount=account.remaining_amount,
        installment_amount=account.installment_amount,
        next_due_date=account.next_due_date,
        status=account.status.value,
        notes=account.notes,
        periodic_rate=summary.periodic_rate,
        total_interest=summary.total_interest,
        total_to_pay=summary.total_to_pay,
        schedule=schedule,
        payments=rows,
    )


@router.post("")
async def open_account(
    req: AccountCreateRequest,
    organization_id: str = Depends(get_organization_id),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> JSONResponse:
    """Open a financed-sale account and compute its installment."""
    result = await create_account(session_factory, organization_id, **req.model_dump())
    return action_response(result, success_status=201)


@router.get("", response_model=AccountListResponse)
async def list_current_accounts(
    status: str | None = Query(None, description="ACTIVE | PAID_OFF"),
    page: int = 1,
    page_size: int = 10,
    organization_id: str = Depends(get_organization_id),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
):
    """List the organization's accounts, newest first."""
    result = await list_accounts(session_factory, organization_id, status, page, page_size)
    if not result.success:
        return action_response(result)
    return AccountListResponse(
        items=[
            AccountSummaryResponse(
                id=a.id,
                total_amount=a.total_amount,
                down_payment=a.down_payment,
                number_of_installments=a.number_of_installments,
                payment_frequency=a.payment_frequency.value,
                remaining_amount=a.remaining_amount,
                installment_amount=a.installment_amount,
                next_due_date=a.next_due_date,
                status=a.status.value,
            )
            for a in result.data["accounts"]
        ],
        total_count=result.data["total_count"],
        page=result.data["page"],
        page_size=result.data["page_size"],
    )


@router.get("/{account_id}", response_model=AccountResponse)
async def get_account(
    account_id: UUID,
    organization_id: str = Depends(get_organization_id),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
):
    """Account state with its amortization plan and ledger rows."""
    result = await get_account_details(session_factory, organization_id, account_id)
    if not result.success:
        return action_response(result)
    return _details_to_response(result.data["account"], result.data["payments"], result.data["schedule"])


@router.post("/{account_id}/payments")
async def pay_installment(
    account_id: UUID,
    req: PaymentRequest,
    organization_id: str = Depends(get_organization_id),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> JSONResponse:
    """Record a payment against the account."""
    result = await record_payment(session_factory, organization_id, account_id, **req.model_dump())
    return action_response(result, success_status=201)
