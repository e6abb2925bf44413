"""Domain services for profile cutting."""

from .cutting_plan import CuttingPlanService, generate_detailed_cutting_layout
from .cutting_stock import (
    CuttingConfig,
    DiagnosticsSink,
    ProfileCuttingOptimizer,
    calculate_profile_consumption,
)
from .weight import WeightResult, profile_length_to_weight

__all__ = [
    "CuttingConfig",
    "CuttingPlanService",
    "DiagnosticsSink",
    "ProfileCuttingOptimizer",
    "WeightResult",
    "calculate_profile_consumption",
    "generate_detailed_cutting_layout",
    "profile_length_to_weight",
]
