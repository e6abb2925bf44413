"""Application layer - use cases and orchestration."""

from .commands import GenerateCuttingPlanCommand, OptimizeConsumptionCommand
from .dtos import ConsumptionOutput, CuttingPlanOutput

__all__ = [
    "ConsumptionOutput",
    "CuttingPlanOutput",
    "GenerateCuttingPlanCommand",
    "OptimizeConsumptionCommand",
]
