"""Electricity Plan Endpoints"""

from typing import Any, List

from fastapi import APIRouter, Depends

from app.api import deps
from app.core.plans import PlanCatalog
from app.schemas.billing import PlanResponse
from app.schemas.responses import SuccessResponse

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[PlanResponse]])
async def list_plans(catalog: PlanCatalog = Depends(deps.get_plan_catalog)) -> Any:
    """
    Available prepaid plans, in catalog order.
    """
    return SuccessResponse(
        data=[
            PlanResponse(
                name=plan.name,
                price_per_unit=float(plan.price_per_unit),
                units_included=plan.units_included,
                validity_days=plan.validity_days,
                active=plan.active,
            )
            for plan in catalog
        ]
    )
