"""Payment routes."""

from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ledger.api.deps import get_organization_id, get_session_factory
from ledger.api.responses import action_response
from ledger.data.reversal import undo_payment

router = APIRouter(prefix="/api/v1/payments", tags=["payments"])


@router.post("/{payment_id}/undo")
async def undo(
    payment_id: UUID,
    organization_id: str = Depends(get_organization_id),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> JSONResponse:
    """Annul a payment with a D/H pair and reopen its installment."""
    result = await undo_payment(session_factory, organization_id, payment_id)
    return action_response(result)
