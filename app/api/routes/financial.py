"""Revenue report route."""

from fastapi import APIRouter, Query

from app.api.deps import DB, CurrentUser
from app.services.financial_service import FinancialService

router = APIRouter(tags=["financial"])


@router.get("/financial", response_model=dict)
async def get_financial_report(
    current_user: CurrentUser,
    db: DB,
    include_paid: bool = Query(True, alias="includePaid"),
    include_unpaid: bool = Query(False, alias="includeUnpaid"),
):
    """
    Revenue by financial year, calendar year, location, service type and service name.

    Returned unwrapped; the reporting UI reads the keys at the top level.
    """
    report = await FinancialService.get_report(
        db,
        current_user.id,
        include_paid=include_paid,
        include_unpaid=include_unpaid,
    )
    return report.model_dump(by_alias=True)
