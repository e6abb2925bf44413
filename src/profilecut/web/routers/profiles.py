"""Profile consumption and cutting plan endpoints."""

from typing import Any

from fastapi import APIRouter

from profilecut.application.config import (
    PlanConfig,
    config_to_cutting_config,
    config_to_plan_cuts,
)
from profilecut.domain import calculate_profile_consumption, generate_detailed_cutting_layout
from profilecut.infrastructure import cutting_plan_to_dict
from profilecut.web.dependencies import DiagnosticsDep
from profilecut.web.schemas.requests import ConsumptionRequest, CuttingPlanRequest
from profilecut.web.schemas.responses import (
    ConsumptionResponseSchema,
    PipePurchaseSchema,
)

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.post("/consumption", response_model=ConsumptionResponseSchema)
def estimate_consumption(
    request: ConsumptionRequest,
    diagnostics: DiagnosticsDep,
) -> ConsumptionResponseSchema:
    """Estimate how many standard pipes a list of cuts consumes.

    Raises:
        ProfileCuttingError: Invalid material, invalid cut or infeasible
            cut list; rendered as a 400 response.
    """
    result = calculate_profile_consumption(
        request.material,
        request.company_id,
        request.required_cut_lengths_ft,
        config=config_to_cutting_config(request.cutting),
        diagnostics=diagnostics,
    )
    return ConsumptionResponseSchema(
        total_pipes_from_stock=result.total_pipes_from_stock,
        pipes_taken_per_standard_length=[
            PipePurchaseSchema(
                length=p.length,
                unit=p.unit,
                length_in_inches=p.length_in_inches,
                count=p.count,
            )
            for p in result.pipes_taken_per_standard_length
        ],
        total_scrap_generated_ft=result.total_scrap_ft,
        final_usable_offcuts_ft=list(result.usable_offcuts_ft),
        warnings=diagnostics.warnings,
    )


@router.post("/cutting-plan")
def create_cutting_plan(
    request: CuttingPlanRequest,
    diagnostics: DiagnosticsDep,
) -> dict[str, Any]:
    """Build a cutting plan limited to the material's stock on hand."""
    plan = generate_detailed_cutting_layout(
        request.material,
        config_to_plan_cuts(PlanConfig(cuts=request.cuts)),
        request.usage_unit.value,
        request.gauge,
        company_id=request.company_id,
        config=config_to_cutting_config(request.cutting),
        diagnostics=diagnostics,
    )
    body = cutting_plan_to_dict(plan)
    body["remainingStock"] = plan.remaining_stock
    body["warnings"] = diagnostics.warnings
    return body
