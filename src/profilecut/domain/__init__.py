"""Domain layer - unit arithmetic, value objects and cutting services."""

from .exceptions import ProfileCuttingError
from .numbers import parse_external_length
from .services import (
    CuttingConfig,
    CuttingPlanService,
    DiagnosticsSink,
    ProfileCuttingOptimizer,
    WeightResult,
    calculate_profile_consumption,
    generate_detailed_cutting_layout,
    profile_length_to_weight,
)
from .units import ConversionResult, UnitType, convert_unit, get_unit_type
from .value_objects import (
    CuttingPlan,
    GaugeWeight,
    LinearUnit,
    OptimizationResult,
    PipeLayout,
    PipePurchase,
    PipeUsageSummary,
    PlannedCut,
    PlannedPipe,
    ProfileMaterial,
    RequiredCutItem,
    StandardLengthEntry,
    StandardStockLength,
    StockEntry,
)

__all__ = [
    "ConversionResult",
    "CuttingConfig",
    "CuttingPlan",
    "CuttingPlanService",
    "DiagnosticsSink",
    "GaugeWeight",
    "LinearUnit",
    "OptimizationResult",
    "PipeLayout",
    "PipePurchase",
    "PipeUsageSummary",
    "PlannedCut",
    "PlannedPipe",
    "ProfileCuttingError",
    "ProfileCuttingOptimizer",
    "ProfileMaterial",
    "RequiredCutItem",
    "StandardLengthEntry",
    "StandardStockLength",
    "StockEntry",
    "UnitType",
    "WeightResult",
    "calculate_profile_consumption",
    "convert_unit",
    "generate_detailed_cutting_layout",
    "get_unit_type",
    "parse_external_length",
    "profile_length_to_weight",
]
