"""Infrastructure layer - output formatting."""

from .formatters import (
    ConsumptionReportFormatter,
    CuttingPlanFormatter,
    cutting_plan_to_dict,
)

__all__ = [
    "ConsumptionReportFormatter",
    "CuttingPlanFormatter",
    "cutting_plan_to_dict",
]
