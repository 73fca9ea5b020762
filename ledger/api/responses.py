"""ActionResult to HTTP response conversion."""

from decimal import Decimal

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ledger.api.schemas import ActionResponse
from ledger.exceptions import ErrorKind
from ledger.models.results import ActionResult

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 422,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.BUSINESS_RULE: 409,
    ErrorKind.PERSISTENCE: 503,
    ErrorKind.UNKNOWN: 500,
}


def action_response(result: ActionResult, success_status: int = 200) -> JSONResponse:
    status = success_status if result.success else STATUS_BY_KIND.get(result.kind, 500)
    body = ActionResponse(
        success=result.success,
        message=result.message,
        kind=result.kind.value if result.kind else None,
        code=result.code,
        data=jsonable_encoder(result.data, custom_encoder={Decimal: str}),
    )
    return JSONResponse(status_code=status, content=body.model_dump())
